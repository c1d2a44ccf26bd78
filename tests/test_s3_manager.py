"""Unit tests for S3 manager."""
import json

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from storage.s3_manager import S3Manager

BUCKET_NAME = 'test-fosdem-schedule'


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture
def s3_bucket(aws_credentials):
    """Create a mock S3 bucket for testing."""
    with mock_aws():
        s3 = boto3.client('s3', region_name='us-east-1')
        s3.create_bucket(Bucket=BUCKET_NAME)
        yield s3


@pytest.fixture
def s3_manager(s3_bucket):
    """Create S3Manager instance with mock bucket."""
    return S3Manager(BUCKET_NAME)


@pytest.fixture
def sample_data():
    return {
        'conference': {'acronym': 'fosdem2025', 'days': ['2025-02-01']},
        'types': {},
        'buildings': {},
        'days': {'1': {'id': 1, 'name': 'Day 1'}},
        'rooms': {},
        'tracks': {},
        'events': {'1001': {'id': '1001', 'title': 'Welcome to FOSDEM'}}
    }


class TestS3Manager:
    """Test cases for S3Manager."""

    def test_object_key(self, s3_manager):
        assert s3_manager.object_key('2025') == 'fosdem-2025.json'

    def test_put_schedule(self, s3_manager, s3_bucket, sample_data):
        """Test that the snapshot is written as pretty-printed JSON."""
        key = s3_manager.put_schedule('2025', sample_data)

        assert key == 'fosdem-2025.json'
        response = s3_bucket.get_object(Bucket=BUCKET_NAME, Key=key)
        body = response['Body'].read().decode('utf-8')
        assert response['ContentType'] == 'application/json'
        assert json.loads(body) == sample_data
        assert body == json.dumps(sample_data, indent=2)

    def test_put_schedule_overwrites(self, s3_manager, sample_data):
        """Test that a later run replaces the stored snapshot."""
        s3_manager.put_schedule('2025', {'events': {}})
        s3_manager.put_schedule('2025', sample_data)

        assert s3_manager.get_schedule('2025') == sample_data

    def test_get_schedule_missing(self, s3_manager):
        """Test that a year without a snapshot returns None."""
        assert s3_manager.get_schedule('1999') is None

    def test_put_schedule_missing_bucket_raises(self, s3_bucket, sample_data):
        """Test that storage errors propagate."""
        manager = S3Manager('no-such-bucket')

        with pytest.raises(ClientError):
            manager.put_schedule('2025', sample_data)
