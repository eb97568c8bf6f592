"""Volume records decoded from ``pasxml`` output."""

from dataclasses import dataclass, field

from pancli.utils.convert import gb_to_bytes


@dataclass
class Bladeset:
    """Bladeset a volume lives on."""

    id: str = ""
    name: str = ""


@dataclass
class Volume:
    """A provisioned PanFS volume."""

    name: str
    id: str = ""
    state: str = ""
    soft_quota_gb: float = 0.0
    hard_quota_gb: float = 0.0
    bladeset: Bladeset = field(default_factory=Bladeset)
    encryption: str = ""

    @property
    def soft_quota_bytes(self) -> int:
        return gb_to_bytes(self.soft_quota_gb)

    @property
    def hard_quota_bytes(self) -> int:
        return gb_to_bytes(self.hard_quota_gb)

    @property
    def encryption_mode(self) -> str:
        """Encryption mode, ``off`` when the appliance reports none."""
        return self.encryption or "off"

    def volume_context(self) -> dict[str, str]:
        """Flatten non-empty attributes into a string map.

        Keys follow the ``pasxml`` element names. Name and quotas are left
        out since callers carry them separately.
        """
        context = {
            "id": self.id,
            "state": self.state,
            "bladesetName/id": self.bladeset.id,
            "bladesetName/Name": self.bladeset.name,
            "encryption": self.encryption,
        }
        return {key: value for key, value in context.items() if value}


@dataclass
class VolumeList:
    """Decoded ``pasxml volumes`` document."""

    version: str = ""
    volumes: list[Volume] = field(default_factory=list)
    supported_urls: list[str] = field(default_factory=list)
