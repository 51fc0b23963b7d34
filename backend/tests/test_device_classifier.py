import pytest
from portal.services.device_classifier import DeviceType, classify
from conftest import ANDROID_UA, IPHONE_UA, MAC_UA, WINDOWS_UA


@pytest.mark.parametrize("user_agent, expected", [
    (IPHONE_UA, DeviceType.IOS),
    ("Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)", DeviceType.IOS),
    (MAC_UA, DeviceType.MACOS),
    (ANDROID_UA, DeviceType.ANDROID),
    (WINDOWS_UA, DeviceType.WINDOWS),
    ("curl/8.4.0", DeviceType.UNKNOWN),
    ("", DeviceType.UNKNOWN),
    (None, DeviceType.UNKNOWN),
])
def test_classify(user_agent, expected):
    assert classify(user_agent) == expected


def test_classify_is_case_insensitive():
    assert classify("ANDROID") == DeviceType.ANDROID
    assert classify("WiNdOwS") == DeviceType.WINDOWS


def test_android_wins_over_mac_and_iphone():
    assert classify("Android; Macintosh") == DeviceType.ANDROID
    assert classify("iPhone Android") == DeviceType.ANDROID


def test_iphone_wins_over_mac():
    # iOS UA에는 "like Mac OS X"가 포함된다
    assert classify("iPhone; like Mac OS X") == DeviceType.IOS


def test_device_type_values():
    assert {d.value for d in DeviceType} == {"ios", "macos", "android", "windows", "unknown"}
