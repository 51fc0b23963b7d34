from enum import Enum
from typing import Optional


class DeviceType(str, Enum):
    IOS = "ios"
    MACOS = "macos"
    ANDROID = "android"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


def classify(user_agent: Optional[str]) -> DeviceType:
    """User-Agent 문자열로 기기 유형을 판별합니다. (대소문자 무시, 먼저 일치한 규칙 우선)"""
    ua = (user_agent or "").lower()
    if "android" in ua:
        return DeviceType.ANDROID
    if "iphone" in ua or "ipad" in ua:
        return DeviceType.IOS
    if "mac" in ua:
        return DeviceType.MACOS
    if "windows" in ua:
        return DeviceType.WINDOWS
    return DeviceType.UNKNOWN
