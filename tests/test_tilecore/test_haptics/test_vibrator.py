import pytest
from unittest.mock import MagicMock
import pygame
from tilecore.haptics.vibrator import Vibrator

# All tests here need the mock_pygame fixture from conftest
pytestmark = pytest.mark.usefixtures("mock_pygame")

def make_pad(instance_id):
    pad = MagicMock()
    pad.get_instance_id.return_value = instance_id
    return pad

def test_init_picks_up_gamepads():
    pads = [make_pad(10), make_pad(11)]
    pygame.joystick.get_count.return_value = 2
    pygame.joystick.Joystick.side_effect = pads

    vibrator = Vibrator()
    vibrator.init()

    assert vibrator.device_count == 2
    for pad in pads:
        pad.init.assert_called_once()

def test_init_failure_is_logged(caplog):
    pygame.joystick.init.side_effect = pygame.error("no joystick support")

    vibrator = Vibrator()
    vibrator.init()

    assert vibrator.device_count == 0
    assert "no joystick support" in caplog.text
    # Nothing to rumble, nothing raised
    vibrator.vibrate(30)

def test_vibrate_rumbles_every_pad():
    pads = [make_pad(1), make_pad(2)]
    pygame.joystick.get_count.return_value = 2
    pygame.joystick.Joystick.side_effect = pads

    vibrator = Vibrator(low_frequency=0.25, high_frequency=2.0)
    vibrator.init()
    vibrator.vibrate(30)

    for pad in pads:
        pad.rumble.assert_called_once_with(0.25, 1.0, 30)

def test_zero_length_pulse_is_ignored():
    pad = make_pad(1)
    pygame.joystick.get_count.return_value = 1
    pygame.joystick.Joystick.side_effect = [pad]

    vibrator = Vibrator()
    vibrator.init()
    vibrator.vibrate(0)

    pad.rumble.assert_not_called()

def test_rumble_error_is_swallowed(caplog):
    pad = make_pad(3)
    pad.rumble.side_effect = pygame.error("unsupported")
    pygame.joystick.get_count.return_value = 1
    pygame.joystick.Joystick.side_effect = [pad]

    vibrator = Vibrator()
    vibrator.init()
    vibrator.vibrate(30)

    assert "unsupported" in caplog.text

def test_refresh_before_init_does_nothing():
    vibrator = Vibrator()
    vibrator.refresh()

    pygame.joystick.get_count.assert_not_called()
    assert vibrator.device_count == 0
