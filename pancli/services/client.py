"""Volume operations on a PanFS realm through its CLI."""

import logging
from collections.abc import Mapping

from pancli.errors import DecodeError, InvalidArgumentError, NotFoundError
from pancli.models import Volume, VolumeCreateParams, VolumeList
from pancli.protocols import CommandRunner
from pancli.services.decoder import parse_volume_list
from pancli.utils.convert import format_gb

logger = logging.getLogger(__name__)


class PancliClient:
    """Typed create/read/update/delete operations on volumes.

    Example:
        >>> client = PancliClient(executor)
        >>> volume = await client.create_volume(
        ...     "v1", VolumeCreateParams(bladeset="Set 1"), secrets
        ... )
    """

    def __init__(self, runner: CommandRunner, listing_command: str = "pasxml") -> None:
        """Initialize client.

        Args:
            runner: Runs commands and raises classified errors
            listing_command: Appliance command producing XML listings
        """
        self.runner = runner
        self.listing_command = listing_command

    async def create_volume(
        self,
        name: str,
        params: VolumeCreateParams | None,
        secrets: Mapping[str, str],
    ) -> Volume:
        """Create a volume and return it as the appliance reports it.

        ``volume create`` does not echo the new volume, so it is read back
        with a follow-up get.

        Raises:
            AlreadyExistsError: If the volume exists; no read-back is issued
            PancliError: For other appliance errors
        """
        args = ["volume", "create", name]
        if params is not None:
            args.extend(params.to_args())

        logger.debug("CreateVolume executes: command=%r", " ".join(args))
        await self.runner.run(secrets, *args)

        return await self.get_volume(name, secrets)

    async def delete_volume(self, name: str, secrets: Mapping[str, str]) -> None:
        """Force-delete a volume."""
        args = ["volume", "delete", "-f", name]
        logger.debug("DeleteVolume executes: command=%r", " ".join(args))
        await self.runner.run(secrets, *args)

    async def expand_volume(
        self,
        name: str,
        size_bytes: int,
        secrets: Mapping[str, str],
    ) -> None:
        """Set a volume's soft quota to ``size_bytes``."""
        args = ["volume", "set", "soft-quota", name, format_gb(size_bytes)]
        logger.debug("ExpandVolume executes: command=%r", " ".join(args))
        await self.runner.run(secrets, *args)

    async def list_volumes(self, secrets: Mapping[str, str]) -> VolumeList:
        """List all volumes on the realm.

        Raises:
            DecodeError: If the listing cannot be parsed
            InvalidArgumentError: If the appliance rejected the query shape
        """
        args = [self.listing_command, "volumes"]
        logger.debug("ListVolumes executes: command=%r", " ".join(args))
        output = await self.runner.run(secrets, *args)
        return self._decode(output, "ListVolumes")

    async def get_volume(self, name: str, secrets: Mapping[str, str]) -> Volume:
        """Read one volume by name.

        Raises:
            NotFoundError: If the listing holds no volume
            DecodeError: If the listing cannot be parsed
            InvalidArgumentError: If the appliance rejected the query shape
        """
        args = [self.listing_command, "volumes", "volume", name]
        logger.debug("GetVolume executes: command=%r", " ".join(args))
        output = await self.runner.run(secrets, *args)

        volumes = self._decode(output, "GetVolume")
        if not volumes.volumes:
            raise NotFoundError(name)
        return volumes.volumes[0]

    def _decode(self, output: bytes, operation: str) -> VolumeList:
        try:
            volumes = parse_volume_list(output)
        except DecodeError as e:
            raise DecodeError(f"{operation}: {e.detail}") from e

        # The appliance answers unsupported queries with a list of URLs it
        # does support instead of an error message.
        if volumes.supported_urls:
            raise InvalidArgumentError(
                f"{operation}: unsupported query, supported URLs: "
                + ", ".join(url for url in volumes.supported_urls if url)
            )
        return volumes
