import uuid

import mongomock
import pytest
from mongoengine import disconnect

from course_admin import create_app
from course_admin.db import get_db


@pytest.fixture
def app():
    db_name = f"course_admin_test_{uuid.uuid4().hex[:8]}"
    app = create_app({
        "MONGO_URI": "mongodb://localhost",
        "MONGO_CLIENT_CLASS": mongomock.MongoClient,
        "DB_NAME": db_name,
        "TESTING": True,
    })
    yield app
    get_db().client.drop_database(db_name)
    disconnect()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return get_db()


@pytest.fixture
def partitions(app):
    return app.extensions["cohort_partitions"]
