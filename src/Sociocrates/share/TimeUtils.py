import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


class TimeUtils:
    """
    一个用于处理时间相关操作的工具类。
    所有存入数据库的时间都是朴素的 (naive) UTC datetime。
    """

    @staticmethod
    def utcnow() -> datetime:
        """返回当前时间的朴素 UTC datetime。"""
        return datetime.now(ZoneInfo("UTC")).replace(tzinfo=None)

    def now(self) -> datetime:
        """
        业务逻辑使用的当前时间。
        测试中可以通过子类覆盖此方法来固定时间。
        """
        return self.utcnow()

    @staticmethod
    def get_utc_end_time(duration_seconds: int, start_time: datetime) -> datetime:
        """
        根据持续秒数计算步骤的结束时间。

        Args:
            duration_seconds: 持续的秒数，必须为非负数。
            start_time: 计算的起始时间（朴素 UTC datetime）。

        Returns:
            一个代表结束时间的朴素 UTC datetime 对象。
        """
        if duration_seconds < 0:
            raise ValueError(f"持续时间不能为负数: {duration_seconds}")
        return start_time + timedelta(seconds=duration_seconds)

    @staticmethod
    def is_expired(end_time: datetime | None, now: datetime) -> bool:
        """没有结束时间的步骤永不过期。"""
        if end_time is None:
            return False
        return now >= end_time
