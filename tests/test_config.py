from openapi_node_builder.config import BuilderConfig, load_config


class TestLoadConfig:
    def test_defaults_without_file(self):
        config = load_config(None)
        assert config == BuilderConfig()
        assert config.endpoint_notice is True
        assert config.skip_deprecated is True
        assert config.overrides == []

    def test_empty_file(self, tmp_path):
        f = tmp_path / "config.yaml"
        f.write_text("")
        assert load_config(f) == BuilderConfig()

    def test_values_from_yaml(self, tmp_path):
        f = tmp_path / "config.yaml"
        f.write_text(
            "endpoint_notice: false\n"
            "overrides:\n"
            "  - find: {name: resource}\n"
            "    replace: {default: Pet}\n"
        )
        config = load_config(f)
        assert config.endpoint_notice is False
        assert config.overrides[0].find == {"name": "resource"}
        assert config.overrides[0].replace == {"default": "Pet"}
