from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings
from src.platform.constant.path import BASE_DIR, DATA_DIR


@pytest.mark.unit
class TestSettingsFromEnvFile:
    def test_shipped_env_example_parses(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        Given: the repository's .env.example with nothing overriding it
        When: Settings is built from it
        Then: every value loads, CORS origins come back as a list
        """
        # Arrange
        for key in ('DATABASE_URL', 'SEED_ON_STARTUP', 'MAX_BOOKINGS_PER_MEMBER'):
            monkeypatch.delenv(key, raising=False)

        # Act
        loaded = Settings(_env_file=BASE_DIR / '.env.example')  # type: ignore[call-arg]

        # Assert
        assert loaded.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
        assert loaded.MAX_BOOKINGS_PER_MEMBER == 2
        assert loaded.SEED_ON_STARTUP is True
        assert loaded.DATABASE_URL_ASYNC == 'sqlite+aiosqlite:///./booking.db'

    def test_comma_separated_cors_origins(self, tmp_path: Path) -> None:
        # Arrange
        env_file = tmp_path / '.env'
        env_file.write_text('BACKEND_CORS_ORIGINS=http://a.test, http://b.test\n')

        # Act
        loaded = Settings(_env_file=env_file)  # type: ignore[call-arg]

        # Assert
        assert loaded.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_json_list_cors_origins(self, tmp_path: Path) -> None:
        # Arrange
        env_file = tmp_path / '.env'
        env_file.write_text('BACKEND_CORS_ORIGINS=["http://a.test","http://b.test"]\n')

        # Act
        loaded = Settings(_env_file=env_file)  # type: ignore[call-arg]

        # Assert
        assert loaded.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_cors_origins_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://c.test')

        loaded = Settings(_env_file=None)  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == ['http://c.test']

    def test_seed_data_dir_defaults_to_repo_data(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('SEED_DATA_DIR', raising=False)

        loaded = Settings(_env_file=None)  # type: ignore[call-arg]

        assert loaded.SEED_DATA_DIR == DATA_DIR

    def test_max_bookings_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('MAX_BOOKINGS_PER_MEMBER', '0')

        with pytest.raises(ValueError):
            Settings(_env_file=None)  # type: ignore[call-arg]
