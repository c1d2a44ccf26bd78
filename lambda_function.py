"""AWS Lambda handler for the FOSDEM schedule sync."""
import json
import logging
import os
import time
from datetime import datetime
from typing import Dict, Any

from processor.errors import InputShapeError, RetrievalError
from processor.schedule_builder import build_data, validate_year
from scraper.fosdem_schedule import ScheduleFetcher
from storage.s3_manager import S3Manager


# Attributes every LogRecord carries; anything else came in through extra=
RESERVED_LOG_ATTRIBUTES = frozenset(
    logging.LogRecord('', logging.INFO, '', 0, '', (), None).__dict__
) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in record.__dict__.items():
            if key not in RESERVED_LOG_ATTRIBUTES and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _error_response(status_code: int, message: str, error: Exception,
                    start_time: float, **extra: Any) -> Dict[str, Any]:
    body = {
        'message': message,
        'error': str(error),
        'error_type': type(error).__name__,
        'duration_seconds': round(time.time() - start_time, 2)
    }
    body.update(extra)
    return {'statusCode': status_code, 'body': json.dumps(body)}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for the schedule sync.

    Args:
        event: EventBridge event payload (may carry a ``year`` override)
        context: Lambda context object

    Returns:
        Response dict with statusCode and summary statistics
    """
    # Read configuration from environment variables
    year = (event or {}).get('year') or os.environ.get('YEAR', str(datetime.now().year))
    bucket_name = os.environ.get('BUCKET_NAME', 'fosdem-schedule')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Lambda execution started",
        extra={
            'year': year,
            'bucket_name': bucket_name,
            'timeout_seconds': timeout_seconds
        }
    )

    try:
        try:
            validate_year(year)
        except InputShapeError as e:
            logger.error(f"Rejected schedule year {year!r}: {e}")
            return _error_response(400, 'Invalid year', e, start_time)

        fetcher = ScheduleFetcher(timeout=timeout_seconds)
        s3_manager = S3Manager(bucket_name=bucket_name)

        try:
            logger.info("Fetching schedule")
            text = fetcher.fetch_schedule(year)
        except RetrievalError as e:
            logger.error(
                f"Failed to fetch schedule after retries: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response(500, 'Failed to fetch schedule', e, start_time)

        logger.info("Building schedule data")
        result = build_data(text, year)
        data = result.to_dict()

        try:
            object_key = s3_manager.object_key(year)
            changed = s3_manager.get_schedule(year) != data
            if changed:
                logger.info("Storing schedule snapshot")
                s3_manager.put_schedule(year, data)
            else:
                logger.info("Stored snapshot is up to date, skipping write")
        except Exception as e:
            # Nothing was overwritten, the previous snapshot stays in place
            logger.error(
                f"Error storing schedule snapshot: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response(
                500, 'Failed to store schedule', e, start_time,
                note='Previous snapshot remains in S3'
            )

        duration = time.time() - start_time
        statistics = {
            'year': year,
            'object_key': object_key,
            'changed': changed,
            'events': len(result.events),
            'tracks': len(result.tracks),
            'rooms': len(result.rooms),
            'days': len(result.days),
            'duration_seconds': round(duration, 2)
        }

        logger.info("Lambda execution completed successfully", extra=statistics)

        return {
            'statusCode': 200,
            'body': json.dumps({
                'message': 'Sync completed successfully',
                'statistics': statistics
            })
        }

    except Exception as e:
        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(time.time() - start_time, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _error_response(500, 'Sync failed', e, start_time)
