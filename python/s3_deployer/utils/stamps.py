"""日付・時刻スタンプ"""
from datetime import date, datetime
from typing import Optional


def generate_datestamp(today: Optional[date] = None) -> str:
    """フォルダ名に付ける日付スタンプ（.yyyyMMdd）"""
    today = today or date.today()
    return "." + today.strftime("%Y%m%d")


def generate_timestamp(now: Optional[datetime] = None) -> str:
    """コンソール出力用のタイムスタンプ（HH:mm:ss）"""
    now = now or datetime.now()
    return now.strftime("%H:%M:%S")


def apply_datestamp(folder: str, enabled: bool, today: Optional[date] = None) -> str:
    """空でないフォルダ名に日付スタンプを付ける"""
    if not enabled or folder == "":
        return folder
    return folder + generate_datestamp(today)
