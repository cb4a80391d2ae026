import json
from typing import Any, Optional

import numpy as np

from kunfig.config.core import ConfigNode


class ConfigJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles ConfigNode trees and NumPy types.

    Nodes are exported through `ConfigNode.all()`; numpy arrays and numeric
    types are converted to Python built-ins so they can be serialized to JSON.
    """

    def default(self, o: Any) -> Any:
        """Converts nodes and NumPy types to JSON-serializable Python types."""
        if isinstance(o, ConfigNode):
            return o.all()
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        if isinstance(o, np.bool_):
            return bool(o)
        return super().default(o)


def dumps(value: Any, indent: Optional[int] = 2) -> str:
    """Renders a node (or any value found in one) as JSON text."""
    return json.dumps(value, cls=ConfigJSONEncoder, indent=indent, ensure_ascii=False)
