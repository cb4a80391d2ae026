import json

import numpy as np
import pytest

from kunfig.config import ConfigJSONEncoder, ConfigNode, dumps


class TestConfigJSONEncoder:
    """Tests for ConfigJSONEncoder class."""

    def test_encode_node(self, app_config):
        result = json.dumps(ConfigNode(app_config), cls=ConfigJSONEncoder)
        assert json.loads(result) == app_config

    def test_encode_node_value(self, app_config):
        node = ConfigNode(app_config)
        assert json.loads(dumps(node.get("app.db"))) == {"host": "h1", "port": 1}
        assert json.loads(dumps(node.get("app.db.port"))) == 1

    def test_encode_numpy_values(self):
        node = ConfigNode()
        node.set("weights", np.array([1, 2, 3]))
        node.set("limits.count", np.int64(42))
        node.set("limits.ratio", np.float64(0.5))
        node.set("limits.enabled", np.bool_(True))
        decoded = json.loads(dumps(node))
        assert decoded == {"weights": [1, 2, 3], "limits": {"count": 42, "ratio": pytest.approx(0.5), "enabled": True}}
        assert isinstance(decoded["limits"]["count"], int)

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            dumps(ConfigNode({"value": object()}))


def test_dumps_indent():
    assert dumps(ConfigNode({"a": 1}), indent=None) == '{"a": 1}'
    assert dumps(ConfigNode({"a": 1})) == '{\n  "a": 1\n}'


def test_dumps_keeps_unicode():
    assert dumps({"name": "café"}, indent=None) == '{"name": "café"}'
