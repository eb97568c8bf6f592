"""Decode ``pasxml`` volume listings."""

import xml.etree.ElementTree as ET

from pancli.errors import DecodeError
from pancli.models import Bladeset, Volume, VolumeList


def _text(element: ET.Element, path: str) -> str:
    child = element.find(path)
    if child is None or child.text is None:
        return ""
    return child.text


def _float(element: ET.Element, path: str) -> float:
    value = _text(element, path).strip()
    if not value:
        return 0.0
    try:
        return float(value)
    except ValueError as e:
        raise DecodeError(f"invalid {path} value {value!r}") from e


def _parse_volume(element: ET.Element) -> Volume:
    name = _text(element, "name")
    if name.startswith("/"):
        name = name[1:]

    bladeset = Bladeset()
    bladeset_element = element.find("bladesetName")
    if bladeset_element is not None:
        bladeset = Bladeset(
            id=bladeset_element.get("id", ""),
            name=bladeset_element.text or "",
        )

    return Volume(
        name=name,
        id=element.get("id", ""),
        state=_text(element, "state"),
        soft_quota_gb=_float(element, "softQuotaGB"),
        hard_quota_gb=_float(element, "hardQuotaGB"),
        bladeset=bladeset,
        encryption=_text(element, "encryption"),
    )


def parse_volume_list(data: bytes | str) -> VolumeList:
    """Decode a ``pasxml volumes`` document.

    Args:
        data: Raw command output

    Returns:
        VolumeList with volumes and any supported-URL hints

    Raises:
        DecodeError: If the payload is not a well-formed pasxml document
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise DecodeError(str(e)) from e

    if root.tag != "pasxml":
        raise DecodeError(f"expected element type <pasxml> but have <{root.tag}>")

    return VolumeList(
        version=root.get("version", ""),
        volumes=[_parse_volume(volume) for volume in root.findall("volumes/volume")],
        supported_urls=[
            url.text or "" for url in root.findall("supportedUrls/url")
        ],
    )
