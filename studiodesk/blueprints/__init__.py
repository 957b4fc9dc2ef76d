"""Dashboard page blueprints."""
