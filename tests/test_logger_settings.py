import json
import logging
from pathlib import Path

from crashsite.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig
from crashsite.engine.settings import GenerationSettings
from crashsite.world import WorldGenerator


def test_logger_config_reads_level_and_channels(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "debug", "logChannels": {"paths": True, "spawns": False}}))
    config = LoggerConfig.from_settings(path)
    assert config.level == logging.DEBUG
    assert config.channels["paths"] is True
    assert config.channels["spawns"] is False
    assert config.channels["generator"] is DEFAULT_CHANNELS["generator"]


def test_logger_config_defaults_when_missing_or_broken(tmp_path: Path) -> None:
    missing = LoggerConfig.from_settings(tmp_path / "absent.json")
    assert missing.channels == DEFAULT_CHANNELS
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert LoggerConfig.from_settings(broken).level == logging.INFO


def test_disabled_channel_is_silent(caplog) -> None:
    logger = GameLogger(LoggerConfig(level=logging.DEBUG, channels={"generator": True, "paths": False}))
    with caplog.at_level(logging.DEBUG, logger="crashsite"):
        logger.channel("paths").info("hidden")
        logger.channel("generator").info("shown")
        logger.channel("unknown").info("hidden too")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["shown"]


def test_generator_logs_summary(caplog) -> None:
    logger = GameLogger(LoggerConfig(level=logging.INFO, channels=DEFAULT_CHANNELS.copy()))
    with caplog.at_level(logging.INFO, logger="crashsite"):
        WorldGenerator(logger=logger).generate("small", 7)
    generator_records = [r for r in caplog.records if r.name == "crashsite.generator"]
    assert any("World ready" in r.getMessage() for r in generator_records)


def test_quiet_config_disables_everything() -> None:
    logger = GameLogger(LoggerConfig.quiet())
    assert not any(logger.channel(name).enabled for name in DEFAULT_CHANNELS)


def test_generation_settings_from_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "worldGeneration": {
                    "mapSize": "large",
                    "seed": "12",
                    "output": "out/large.json",
                    "preview": "out/large.png",
                }
            }
        )
    )
    settings = GenerationSettings.from_settings(path)
    assert settings.map_size == "large"
    assert settings.seed == 12
    assert settings.output == Path("out/large.json")
    assert settings.preview == Path("out/large.png")
    assert settings.biomes_path is None


def test_generation_settings_defaults(tmp_path: Path) -> None:
    assert GenerationSettings.from_settings(tmp_path / "missing.json") == GenerationSettings()
    broken = tmp_path / "broken.json"
    broken.write_text("[")
    assert GenerationSettings.from_settings(broken) == GenerationSettings()
    odd = tmp_path / "odd.json"
    odd.write_text(json.dumps({"worldGeneration": ["small"]}))
    assert GenerationSettings.from_settings(odd).seed is None
