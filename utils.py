from datetime import datetime, timezone
from flask import current_app

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def utcnow():
    """Naive UTC now, truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def format_date(value):
    return value.strftime(DATE_FORMAT) if value else None


def format_datetime(value):
    return value.strftime(DATETIME_FORMAT) if value else None


def relative_image_path(filename):
    # Images live under the static folder; callers only need the relative path
    if not filename:
        return None
    folder = current_app.config.get("STATIC_IMAGE_FOLDER", "static")
    return f"{folder}/{filename}"
