"""Health probes."""

from sqlalchemy import text

from studiodesk.extensions import db


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert resp.get_json()['status'] == 'healthy'


def test_liveness(client):
    resp = client.get('/health/live')
    assert resp.status_code == 200
    assert resp.get_json()['status'] == 'alive'


def test_readiness(client):
    resp = client.get('/health/ready')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['database'] == 'healthy'
    assert body['schema'] == 'complete'
    assert body['overall'] == 'healthy'


def test_readiness_missing_tables(app, client):
    with app.app_context():
        db.session.execute(text('DROP TABLE projects'))
        db.session.commit()

    resp = client.get('/health/ready')
    assert resp.status_code == 503
    body = resp.get_json()
    assert body['missing_tables'] == ['projects']
    assert body['overall'] == 'unhealthy'
