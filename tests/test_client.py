"""Tests for the volume client."""

from unittest.mock import AsyncMock, MagicMock, call

import pytest

from pancli.errors import (
    AlreadyExistsError,
    DecodeError,
    InvalidArgumentError,
    NotFoundError,
)
from pancli.models import Bladeset, Volume, VolumeCreateParams
from pancli.services.client import PancliClient
from pancli.services.executor import CommandExecutor
from pancli.services.pool import ConnectionPool

VALID_VOLUME_PASXML = b"""<pasxml version="6.0.0">
  <system>
    <name>virtual-realm.local.com</name>
    <IPV4>realm.ip.address</IPV4>
    <alertLevel>warning</alertLevel>
    <state>online</state>
  </system>
  <time>2025-06-26T13:10:49Z</time>
  <volumes>
      <volume id="371">
      <name>/v1</name>
      <bladesetName id="1">Set 1</bladesetName>
      <state>Online</state>
      <raid>Object RAID6+</raid>
      <recoveryPriority>50</recoveryPriority>
      <efsaMode>retry</efsaMode>
      <spaceUsedGB>0</spaceUsedGB>
      <spaceAvailableGB>95.00</spaceAvailableGB>
      <hardQuotaGB>0</hardQuotaGB>
      <softQuotaGB>0</softQuotaGB>
    </volume></volumes>
</pasxml>"""

EMPTY_PASXML = b'<pasxml version="6.0.0"><volumes></volumes></pasxml>'

UNSUPPORTED_QUERY_PASXML = b"""<pasxml version="6.0.0">
  <volumes></volumes>
  <supportedUrls>
    <url>volumes</url>
    <url>volumes/volume/NAME</url>
  </supportedUrls>
</pasxml>"""

EXPECTED_VOLUME = Volume(
    name="v1",
    id="371",
    state="Online",
    soft_quota_gb=0.0,
    hard_quota_gb=0.0,
    bladeset=Bladeset(id="1", name="Set 1"),
)


@pytest.fixture
def runner() -> MagicMock:
    runner = MagicMock()
    runner.run = AsyncMock()
    return runner


@pytest.fixture
def client(runner) -> PancliClient:
    return PancliClient(runner)


class TestCreateVolume:
    """Tests for create_volume."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, client, runner, secrets) -> None:
        runner.run.side_effect = [b"Volume v1 created successfully", VALID_VOLUME_PASXML]

        volume = await client.create_volume("v1", VolumeCreateParams(bladeset="Set 1"), secrets)

        assert volume == EXPECTED_VOLUME
        assert runner.run.await_args_list == [
            call(secrets, "volume", "create", "v1", "bladeset", '"Set 1"'),
            call(secrets, "pasxml", "volumes", "volume", "v1"),
        ]

    @pytest.mark.asyncio
    async def test_create_without_params(self, client, runner, secrets) -> None:
        runner.run.side_effect = [b"", VALID_VOLUME_PASXML]

        await client.create_volume("v1", None, secrets)

        assert runner.run.await_args_list[0] == call(secrets, "volume", "create", "v1")

    @pytest.mark.asyncio
    async def test_already_exists_skips_get(self, client, runner, secrets) -> None:
        runner.run.side_effect = AlreadyExistsError("Volume v1 already exists")

        with pytest.raises(AlreadyExistsError):
            await client.create_volume("v1", VolumeCreateParams(), secrets)

        runner.run.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_created_but_read_back_fails(self, client, runner, secrets) -> None:
        runner.run.side_effect = [b"", b"<invalid xml"]

        with pytest.raises(DecodeError, match="GetVolume"):
            await client.create_volume("v1", VolumeCreateParams(bladeset="Set 1"), secrets)

        assert runner.run.await_count == 2


class TestOtherOperations:
    """Tests for delete, expand, list and get."""

    @pytest.mark.asyncio
    async def test_delete_is_forced(self, client, runner, secrets) -> None:
        runner.run.return_value = b"Volume v1 deleted successfully"

        assert await client.delete_volume("v1", secrets) is None

        runner.run.assert_awaited_once_with(secrets, "volume", "delete", "-f", "v1")

    @pytest.mark.asyncio
    async def test_delete_error_propagates(self, client, runner, secrets) -> None:
        runner.run.side_effect = NotFoundError("No volume with name v1")

        with pytest.raises(NotFoundError):
            await client.delete_volume("v1", secrets)

    @pytest.mark.asyncio
    async def test_expand_converts_to_gb(self, client, runner, secrets) -> None:
        runner.run.return_value = b"soft quota set successfully"

        await client.expand_volume("v1", 5 * 2**30 + 2**29, secrets)

        runner.run.assert_awaited_once_with(
            secrets, "volume", "set", "soft-quota", "v1", "5.50"
        )

    @pytest.mark.asyncio
    async def test_list_volumes(self, client, runner, secrets) -> None:
        runner.run.return_value = VALID_VOLUME_PASXML

        volumes = await client.list_volumes(secrets)

        assert volumes.version == "6.0.0"
        assert volumes.volumes == [EXPECTED_VOLUME]
        runner.run.assert_awaited_once_with(secrets, "pasxml", "volumes")

    @pytest.mark.asyncio
    async def test_list_with_supported_urls_is_invalid_argument(
        self, client, runner, secrets
    ) -> None:
        runner.run.return_value = UNSUPPORTED_QUERY_PASXML

        with pytest.raises(InvalidArgumentError, match="volumes/volume/NAME"):
            await client.list_volumes(secrets)

    @pytest.mark.asyncio
    async def test_get_with_supported_urls_is_invalid_argument(
        self, client, runner, secrets
    ) -> None:
        runner.run.return_value = UNSUPPORTED_QUERY_PASXML

        with pytest.raises(InvalidArgumentError):
            await client.get_volume("v1", secrets)

    @pytest.mark.asyncio
    async def test_get_empty_listing_is_not_found(self, client, runner, secrets) -> None:
        runner.run.return_value = EMPTY_PASXML

        with pytest.raises(NotFoundError):
            await client.get_volume("v1", secrets)

    @pytest.mark.asyncio
    async def test_list_decode_error(self, client, runner, secrets) -> None:
        runner.run.return_value = b"<pasxml><volumes>"

        with pytest.raises(DecodeError, match="ListVolumes"):
            await client.list_volumes(secrets)

    @pytest.mark.asyncio
    async def test_custom_listing_command(self, runner, secrets) -> None:
        runner.run.return_value = VALID_VOLUME_PASXML
        client = PancliClient(runner, listing_command="pasxml2")

        await client.get_volume("v1", secrets)

        runner.run.assert_awaited_once_with(secrets, "pasxml2", "volumes", "volume", "v1")


class TestEndToEnd:
    """Client, executor and pool wired over a fake session."""

    @pytest.fixture
    def wired_client(self, connector) -> PancliClient:
        pool = ConnectionPool(idle_timeout=0, connector=connector)
        return PancliClient(CommandExecutor(pool))

    @pytest.mark.asyncio
    async def test_create_then_get_command_lines(self, wired_client, connector, secrets) -> None:
        connector.outputs = [b"Volume v1 created successfully", VALID_VOLUME_PASXML]

        volume = await wired_client.create_volume(
            "v1", VolumeCreateParams(bladeset="Set 1"), secrets
        )

        assert volume.name == "v1"
        assert connector.sessions[0].commands == [
            'volume create v1 bladeset "Set 1"',
            "pasxml volumes volume v1",
        ]
        assert len(connector.calls) == 1

    @pytest.mark.asyncio
    async def test_duplicate_create(self, wired_client, connector, secrets) -> None:
        connector.outputs = [b"Volume v1 already exists"]

        with pytest.raises(AlreadyExistsError):
            await wired_client.create_volume("v1", VolumeCreateParams(), secrets)

        assert connector.sessions[0].commands == ["volume create v1"]

    @pytest.mark.asyncio
    async def test_missing_volume(self, wired_client, connector, secrets) -> None:
        connector.outputs = [b"No volume with name v9"]

        with pytest.raises(NotFoundError):
            await wired_client.get_volume("v9", secrets)
