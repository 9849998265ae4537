"""Tracking worker module exports."""

from .poller import TrackingPoller
from .status_projector import UIStep, project_status_steps
from .worker import TrackingWorkerSettings, load_settings, run_tracking

__all__ = [
    "TrackingPoller",
    "TrackingWorkerSettings",
    "UIStep",
    "load_settings",
    "project_status_steps",
    "run_tracking",
]
