"""Domain layer for StudioDesk.

Navigation, permission and formatting rules live here. Nothing in this
package imports Flask, so it can be tested on its own.
"""
