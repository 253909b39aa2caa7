import pytest

from exam_app.core.device_check import DeviceProfile, is_mobile_user_agent, is_supported_device, is_viewport_too_small


@pytest.mark.parametrize(
    "user_agent",
    [
        "Mozilla/5.0 (Linux; Android 14; Pixel 8) Mobile Safari/537.36",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)",
        "Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)",
    ],
)
def test_mobile_user_agents_are_detected(user_agent):
    assert is_mobile_user_agent(user_agent)


def test_desktop_user_agent_is_not_mobile():
    assert not is_mobile_user_agent("Mozilla/5.0 (Windows NT 10.0; Win64; x64)")
    assert not is_mobile_user_agent("")


def test_viewport_thresholds():
    assert is_viewport_too_small(699, 800)
    assert is_viewport_too_small(1024, 499)
    assert not is_viewport_too_small(700, 500)


def test_supported_device_needs_desktop_agent_and_large_viewport():
    assert is_supported_device(DeviceProfile("Mozilla/5.0 (X11; Linux x86_64)", 1280, 800))
    assert not is_supported_device(DeviceProfile("Mozilla/5.0 (X11; Linux x86_64)", 600, 800))
    assert not is_supported_device(DeviceProfile("Mozilla/5.0 (Android 14) Mobile", 1280, 800))
