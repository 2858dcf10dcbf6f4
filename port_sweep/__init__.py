from .channel import ChannelClosed, channel
from .models import PortRange, ScanResult
from .scanner import collect, probe, scan, scan_async, schedule

__all__ = [
    "ChannelClosed",
    "PortRange",
    "ScanResult",
    "channel",
    "collect",
    "probe",
    "scan",
    "scan_async",
    "schedule",
]
