import zoneinfo

from datetime import datetime

from xferlogic.core.conf import settings


class TimeZone:
    def __init__(self) -> None:
        self.tz_info = zoneinfo.ZoneInfo(settings.DATETIME_TIMEZONE)

    def now(self) -> datetime:
        """获取时区时间"""
        return datetime.now(self.tz_info)

    def to_str(self, dt: datetime, format_str: str = settings.DATETIME_FORMAT) -> str:
        """将 datetime 对象转换为指定时区时间的字符串"""
        return dt.astimezone(self.tz_info).strftime(format_str)


timezone: TimeZone = TimeZone()
