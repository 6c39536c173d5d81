"""Tests for NMEA line sources and their configuration."""

import asyncio

import pytest

from bosun.config import Settings
from bosun.feed import run_feed
from bosun.nmea.decoder import NMEADecoder
from bosun.sources import (
    SourceConfigError,
    SourceError,
    create_source,
    create_source_from_config,
    create_source_from_settings,
    load_config,
)
from bosun.sources.config import expand_env
from bosun.sources.sample import SAMPLE_SENTENCES, SampleSource
from bosun.sources.tcp import TCPSource, parse_address

HEADING = "$YDHDG,185.2,,,12.7,E*05"
DEPTH = "$YDDBT,13.3,f,4.08,M,2.23,F*32"


async def _collect(source) -> list[str]:
    return [line async for line in source.lines()]


class TestParseAddress:
    """Test "host:port" parsing."""

    def test_valid(self):
        assert parse_address("192.168.1.1:10110") == ("192.168.1.1", 10110)

    def test_hostname(self):
        assert parse_address("gateway.local:2000") == ("gateway.local", 2000)

    @pytest.mark.parametrize("address", ["192.168.1.1", "", ":10110"])
    def test_missing_port(self, address):
        with pytest.raises(SourceConfigError, match="missing a port"):
            parse_address(address)

    @pytest.mark.parametrize("address", ["host:abc", "host:0", "host:70000"])
    def test_invalid_port(self, address):
        with pytest.raises(SourceConfigError, match="invalid port"):
            parse_address(address)


class TestSampleSource:
    """Test replaying captures."""

    @pytest.mark.asyncio
    async def test_replays_bundled_capture(self):
        source = SampleSource({"interval_seconds": 0})
        await source.start()

        lines = await _collect(source)
        assert lines == SAMPLE_SENTENCES
        assert source.total_lines == len(SAMPLE_SENTENCES)

    @pytest.mark.asyncio
    async def test_replays_file(self, tmp_path):
        path = tmp_path / "capture.nmea"
        path.write_text(f"{HEADING}\n{DEPTH}\n")

        source = SampleSource({"sample_file": str(path), "interval_seconds": 0})
        await source.start()
        assert await _collect(source) == [HEADING, DEPTH]

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        source = SampleSource({"sample_file": str(tmp_path / "missing.nmea")})
        with pytest.raises(SourceConfigError):
            await source.start()

    @pytest.mark.asyncio
    async def test_loop_until_stopped(self, tmp_path):
        path = tmp_path / "capture.nmea"
        path.write_text(f"{HEADING}\n")

        source = SampleSource(
            {"sample_file": str(path), "interval_seconds": 0, "loop": True}
        )
        await source.start()

        received = []
        async for line in source.lines():
            received.append(line)
            if len(received) == 3:
                await source.stop()
        assert received == [HEADING] * 3

    @pytest.mark.asyncio
    async def test_health_check(self):
        source = SampleSource({"interval_seconds": 0})
        assert await source.health_check() is False
        await source.start()
        assert await source.health_check() is True

    def test_source_info(self):
        info = SampleSource({"name": "Capture", "loop": True}).get_source_info().to_dict()
        assert info["name"] == "Capture"
        assert info["type"] == "sample"
        assert info["is_active"] is False
        assert info["extra_info"]["loop"] is True


class TestTCPSource:
    """Test reading from a TCP stream."""

    @pytest.mark.asyncio
    async def test_reads_lines_until_closed(self):
        async def serve(reader, writer):
            writer.write(f"{HEADING}\r\n\r\n{DEPTH}\r\n".encode("ascii"))
            await writer.drain()
            writer.close()

        server = await asyncio.start_server(serve, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]

        async with server:
            source = TCPSource({"name": "bus", "address": f"127.0.0.1:{port}"})
            await source.start()
            assert await source.health_check() is True

            lines = await _collect(source)
            await source.stop()

        assert lines == [HEADING, "", DEPTH]
        assert source.total_lines == 3
        assert source.is_started is False

    @pytest.mark.asyncio
    async def test_overlong_line_does_not_stop_the_stream(self):
        async def serve(reader, writer):
            writer.write(b"X" * 70000 + b"\r\n")
            writer.write(f"{HEADING}\r\n".encode("ascii"))
            await writer.drain()
            writer.close()

        server = await asyncio.start_server(serve, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        decoder = NMEADecoder()

        async with server:
            source = TCPSource({"name": "bus", "address": f"127.0.0.1:{port}"})
            await source.start()
            await run_feed(source, decoder)
            await source.stop()

        assert decoder.state.heading_true == pytest.approx(197.9)

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        server.close()
        await server.wait_closed()

        source = TCPSource({"name": "bus", "address": f"127.0.0.1:{port}"})
        with pytest.raises(SourceError, match="Connection failed"):
            await source.start()

    @pytest.mark.asyncio
    async def test_lines_before_start(self):
        source = TCPSource({"address": "127.0.0.1:10110"})
        with pytest.raises(SourceError, match="not connected"):
            await _collect(source)

    def test_invalid_address_rejected_at_creation(self):
        with pytest.raises(SourceConfigError):
            TCPSource({"address": "192.168.1.1"})

    def test_source_info(self):
        info = TCPSource({"address": "192.168.1.1:10110"}).get_source_info()
        assert info.extra_info == {"address": "192.168.1.1:10110"}


class TestSourceConfig:
    """Test YAML configuration and the source factory."""

    def test_defaults_per_environment(self):
        config = load_config(environment="testing")
        assert config["source"]["type"] == "sample"
        assert config["source"]["config"]["loop"] is False

    def test_unknown_environment_uses_development(self):
        config = load_config(environment="moon")
        assert config["source"]["config"]["loop"] is True

    def test_yaml_file_with_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NMEA_ADDRESS", "10.0.0.5:10110")
        path = tmp_path / "sources.yaml"
        path.write_text(
            "production:\n"
            "  source:\n"
            "    name: Bus\n"
            "    type: tcp\n"
            "    config:\n"
            "      address: ${NMEA_ADDRESS}\n"
        )

        config = load_config(str(path), "production")
        assert config["source"]["config"]["address"] == "10.0.0.5:10110"

        source = create_source_from_config(config)
        assert isinstance(source, TCPSource)
        assert source.name == "Bus"
        assert (source.host, source.port) == ("10.0.0.5", 10110)

    def test_env_reference_inside_string_and_fallback(self, monkeypatch):
        monkeypatch.setenv("NMEA_HOST", "10.0.0.5")
        monkeypatch.delenv("NMEA_PORT", raising=False)
        assert expand_env({"address": "${NMEA_HOST}:${NMEA_PORT:-10110}"}) == {
            "address": "10.0.0.5:10110"
        }

    def test_yaml_must_be_a_mapping(self, tmp_path):
        path = tmp_path / "sources.yaml"
        path.write_text("- development\n")
        with pytest.raises(SourceConfigError):
            load_config(str(path), "development")

    def test_missing_environment_in_file_uses_defaults(self, tmp_path):
        path = tmp_path / "sources.yaml"
        path.write_text("staging:\n  source:\n    type: sample\n")
        config = load_config(str(path), "testing")
        assert config["source"]["name"] == "Test Capture"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "sources.yaml"
        path.write_text("development: [unclosed\n")
        with pytest.raises(SourceConfigError):
            load_config(str(path), "development")

    def test_unknown_source_type(self):
        with pytest.raises(SourceConfigError, match="Unknown source type"):
            create_source("serial", {})

    def test_config_without_source(self):
        with pytest.raises(SourceConfigError):
            create_source_from_config({})

    def test_from_settings_tcp(self):
        settings = Settings(nmea_source="tcp", nmea_address="10.0.0.5:2000")
        source = create_source_from_settings(settings)
        assert isinstance(source, TCPSource)
        assert source.port == 2000

    def test_from_settings_sample(self):
        settings = Settings(nmea_source="sample", sample_interval_seconds=0.1)
        source = create_source_from_settings(settings)
        assert isinstance(source, SampleSource)
        assert source.interval == 0.1

    def test_from_settings_testing_environment(self, tmp_path):
        path = tmp_path / "sources.yaml"
        path.write_text(
            "testing:\n"
            "  source:\n"
            "    name: Test Capture\n"
            "    type: sample\n"
            "    config:\n"
            "      interval_seconds: 0\n"
            "      loop: false\n"
        )
        settings = Settings(environment="testing", sources_config_file=str(path))

        source = create_source_from_settings(settings)
        assert isinstance(source, SampleSource)
        assert source.loop is False
