import pytest
from conftest import ScriptedHardware

from burrow.utils.waiting import wait_until


def test_returns_immediately_when_condition_holds():
    hardware = ScriptedHardware()
    assert wait_until(lambda: True, hardware, interval_s=1.0)
    assert hardware.names("idle") == []


def test_polls_until_condition_holds():
    hardware = ScriptedHardware()
    assert wait_until(lambda: len(hardware.names("idle")) >= 3, hardware, interval_s=0.5)
    assert hardware.names("idle") == [0.5, 0.5, 0.5]


def test_gives_up_after_timeout():
    hardware = ScriptedHardware()
    assert not wait_until(lambda: False, hardware, interval_s=2.0, timeout_s=5.0, description="nothing")
    assert hardware.names("idle") == [2.0, 2.0, 2.0]


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        wait_until(lambda: True, ScriptedHardware(), interval_s=0)
