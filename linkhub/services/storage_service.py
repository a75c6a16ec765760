"""
Object Storage Service for S3-compatible storage (R2, MinIO, AWS S3).

Workspace assets (logos) are uploaded as public-read objects and addressed
by their public URL; keys are recovered from the URL when an asset is
replaced or removed.
"""
import base64
import binascii
import json
import logging
import re
from typing import Optional, Tuple, Union

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import ClientError
from flask import current_app

logger = logging.getLogger(__name__)

DATA_URI_RE = re.compile(r'^data:(?P<content_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$', re.DOTALL)


def parse_data_uri(value: str) -> Tuple[bytes, str]:
    """
    Decode a base64 data URI.

    Returns:
        (raw bytes, content type)

    Raises:
        ValueError: If the value is not a base64 data URI
    """
    match = DATA_URI_RE.match(value.strip())
    if not match:
        raise ValueError("Invalid image: expected a base64-encoded data URI")
    try:
        data = base64.b64decode(match.group('data'), validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Invalid image: malformed base64 payload")
    return data, match.group('content_type')


class StorageService:
    """
    S3-compatible object storage service.

    Usage:
        storage = StorageService()
        uploaded = storage.upload('workspaces/ws_123/logo_abc', 'data:image/png;base64,...')
        storage.delete(uploaded['key'])
    """

    def __init__(self):
        """Initialize S3 client from Flask config."""
        self.endpoint = current_app.config['S3_ENDPOINT']
        self.access_key = current_app.config['S3_ACCESS_KEY']
        self.secret_key = current_app.config['S3_SECRET_KEY']
        self.bucket = current_app.config['S3_BUCKET']
        self.region = current_app.config['S3_REGION']
        self.public_url = current_app.config['S3_PUBLIC_URL'].rstrip('/')
        self.max_upload_size = current_app.config.get('MAX_UPLOAD_SIZE', 2 * 1024 * 1024)
        self.allowed_mime_types = current_app.config.get('ALLOWED_MIME_TYPES', set())

        # Initialize boto3 S3 client
        self.client = boto3.client(
            's3',
            endpoint_url=self.endpoint,
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            region_name=self.region,
            config=BotoConfig(signature_version='s3v4')
        )

        # Ensure bucket exists
        self._ensure_bucket_exists()

    def _ensure_bucket_exists(self):
        """Create bucket if it doesn't exist."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
            logger.info(f"[STORAGE] Bucket '{self.bucket}' exists")
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code')
            if error_code != '404':
                logger.error(f"[STORAGE] ✗ Failed to check bucket: {e}")
                raise
            try:
                self.client.create_bucket(Bucket=self.bucket)
                policy = {
                    "Version": "2012-10-17",
                    "Statement": [
                        {
                            "Effect": "Allow",
                            "Principal": {"AWS": "*"},
                            "Action": "s3:GetObject",
                            "Resource": f"arn:aws:s3:::{self.bucket}/*"
                        }
                    ]
                }
                self.client.put_bucket_policy(Bucket=self.bucket, Policy=json.dumps(policy))
                logger.info(f"[STORAGE] ✓ Bucket '{self.bucket}' created with public-read policy")
            except ClientError as create_error:
                logger.error(f"[STORAGE] ✗ Failed to create bucket: {create_error}")
                raise

    def upload(self, key: str, body: Union[str, bytes], content_type: Optional[str] = None) -> dict:
        """
        Upload an object.

        Args:
            key: Object key (e.g., 'workspaces/ws_123/logo_abc1234')
            body: Raw bytes or a base64 data URI
            content_type: MIME type (taken from the data URI when omitted)

        Returns:
            {'url': public URL, 'key': object key}

        Raises:
            ValueError: If the payload fails validation
            ClientError: If upload fails
        """
        if isinstance(body, str):
            data, detected_type = parse_data_uri(body)
            content_type = content_type or detected_type
        else:
            data = body
        content_type = content_type or 'application/octet-stream'

        self._validate(data, content_type)

        try:
            logger.info(f"[STORAGE] Uploading '{key}' to bucket '{self.bucket}'...")
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ACL='public-read'
            )
            url = self.get_public_url(key)
            logger.info(f"[STORAGE] ✓ File uploaded: {url}")
            return {'url': url, 'key': key}
        except ClientError as e:
            logger.exception(f"[STORAGE] ✗ Upload failed: {e}")
            raise

    def delete(self, key: str) -> bool:
        """
        Delete an object.

        Returns:
            True if deleted successfully, False otherwise
        """
        try:
            logger.info(f"[STORAGE] Deleting '{key}' from bucket '{self.bucket}'...")
            self.client.delete_object(Bucket=self.bucket, Key=key)
            logger.info(f"[STORAGE] ✓ File deleted: {key}")
            return True
        except ClientError as e:
            logger.exception(f"[STORAGE] ✗ Delete failed: {e}")
            return False

    def get_public_url(self, key: str) -> str:
        """Public URL of an object (e.g., 'https://cdn.example.com/uploads/workspaces/...')."""
        return f"{self.public_url}/{self.bucket}/{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        """Object key behind a public URL, or None for URLs outside this bucket."""
        prefix = f"{self.public_url}/{self.bucket}/"
        if url and url.startswith(prefix):
            return url[len(prefix):]
        return None

    def _validate(self, data: bytes, content_type: str):
        """
        Validate an upload payload (size, type).

        Raises:
            ValueError: If validation fails
        """
        if not data:
            raise ValueError("Empty file")

        if len(data) > self.max_upload_size:
            max_mb = self.max_upload_size / (1024 * 1024)
            raise ValueError(f"File too large. Maximum size is {max_mb:.1f}MB")

        if self.allowed_mime_types and content_type not in self.allowed_mime_types:
            allowed = ', '.join(sorted(self.allowed_mime_types))
            raise ValueError(f"File type not allowed: {content_type}. Allowed: {allowed}")


# Singleton instance
_storage_service = None


def get_storage_service() -> StorageService:
    """
    Get or create StorageService singleton.

    Returns:
        StorageService instance
    """
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service
