from typing import List

from pydantic import BaseModel


class DeviceKind(BaseModel):
    """A media device kind listed on the device test page."""

    kind: str
    label_prefix: str
    select_id: str
    heading: str


# Order matches the selectors on the page
DEVICE_KINDS: List[DeviceKind] = [
    DeviceKind(kind="videoinput", label_prefix="Camera", select_id="camera-select", heading="Select Camera"),
    DeviceKind(kind="audioinput", label_prefix="Microphone", select_id="microphone-select", heading="Select Microphone"),
    DeviceKind(kind="audiooutput", label_prefix="Speaker", select_id="speaker-select", heading="Select Speaker"),
]
