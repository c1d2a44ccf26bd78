"""S3 manager for schedule snapshot storage."""
import json
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class S3Manager:
    """Manager for S3 operations on schedule snapshots."""

    OBJECT_KEY_TEMPLATE = 'fosdem-{year}.json'
    CONTENT_TYPE = 'application/json'

    def __init__(self, bucket_name: str):
        """
        Initialize S3 client.

        Args:
            bucket_name: Name of the S3 bucket
        """
        self.bucket_name = bucket_name
        self.s3 = boto3.client('s3')
        logger.info(f"Initialized S3Manager for bucket: {bucket_name}")

    def object_key(self, year: str) -> str:
        return self.OBJECT_KEY_TEMPLATE.format(year=year)

    def put_schedule(self, year: str, data: Dict[str, Any]) -> str:
        """
        Store a schedule snapshot as pretty-printed JSON.

        Args:
            year: Edition of the conference
            data: Snapshot as nested dicts and lists

        Returns:
            Object key the snapshot was written to
        """
        key = self.object_key(year)
        body = json.dumps(data, indent=2)
        logger.info(f"Writing {len(body)} bytes to s3://{self.bucket_name}/{key}")

        try:
            self.s3.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body.encode('utf-8'),
                ContentType=self.CONTENT_TYPE
            )
        except ClientError as e:
            logger.error(f"Error writing schedule to S3: {e}")
            raise

        return key

    def get_schedule(self, year: str) -> Optional[Dict[str, Any]]:
        """
        Read a stored schedule snapshot.

        Args:
            year: Edition of the conference

        Returns:
            Parsed snapshot, or None if no snapshot is stored for the year
        """
        key = self.object_key(year)

        try:
            response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                logger.info(f"No schedule stored at s3://{self.bucket_name}/{key}")
                return None
            logger.error(f"Error reading schedule from S3: {e}")
            raise

        return json.loads(response['Body'].read())
