from .datetime import now_in_app_naive_datetime, now_in_app_timezone

__all__ = ["now_in_app_naive_datetime", "now_in_app_timezone"]
