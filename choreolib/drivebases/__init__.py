"""Drivetrain and localizer interfaces used during trajectory playback."""

from .base import Driveable, Localizer
from .mecanum import MecanumDrive, Motor

__all__ = ["Driveable", "Localizer", "MecanumDrive", "Motor"]
