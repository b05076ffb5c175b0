from evalico.core.settings import Settings


def test_defaults_come_from_config_yaml():
    s = Settings(GEMINI_API_KEY="k")
    assert s.llm_provider == "gemini"
    assert s.llm_temperature == 0.7
    assert s.llm_max_tokens == 2000
    assert s.api_base_url is None


def test_explicit_values_override_config():
    s = Settings(GEMINI_API_KEY="k", llm_model="gemini-custom", llm_max_tokens=500)
    assert s.llm_model == "gemini-custom"
    assert s.llm_max_tokens == 500


def test_api_key_read_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    assert Settings().GEMINI_API_KEY == "from-env"
