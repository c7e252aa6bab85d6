import pytest

from icd11_diagnoses import ClientConfig, ConfigurationError, ICDLanguage, load_config, load_credentials
from icd11_diagnoses.auth import TOKEN_URL


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[api]\n'
        'server = "local"\n'
        'version = "v2"\n'
        'language = "ru"\n'
        'timeout = 5\n'
        '\n'
        '[servers]\n'
        'official = "https://id.who.int/icd/"\n'
        'local = "http://localhost:8382/icd"\n'
    )
    return path


def test_load_config(config_file):
    config = load_config(config_file)
    assert config["api"]["server"] == "local"


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_client_config_from_file(config_file):
    config = ClientConfig.from_file(config_file)

    assert config.base_uri == "http://localhost:8382/icd/"
    assert config.api_version == "v2"
    assert config.language is ICDLanguage.RUSSIAN
    assert config.timeout == 5.0
    assert config.token_url == TOKEN_URL


def test_defaults():
    config = ClientConfig()
    assert config.base_uri == "https://id.who.int/icd/"
    assert config.language is ICDLanguage.ENGLISH
    assert config.timeout == 10.0


def test_unknown_server(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[api]\nserver = "mirror"\n')
    with pytest.raises(ConfigurationError):
        ClientConfig.from_file(path)


def test_unknown_language(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[api]\nlanguage = "xx"\n')
    with pytest.raises(ConfigurationError):
        ClientConfig.from_file(path)


def test_repo_config_is_valid():
    config = ClientConfig.from_file()
    assert config.base_uri == "https://id.who.int/icd/"


def test_load_credentials(tmp_path, monkeypatch):
    for name in ("ICD_CLIENT_ID", "ICD_CLIENT_SECRET"):
        # set first so the value load_dotenv writes is undone afterwards
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    env = tmp_path / ".env"
    env.write_text("ICD_CLIENT_ID=abc\nICD_CLIENT_SECRET=xyz\n")

    assert load_credentials(env) == ("abc", "xyz")
