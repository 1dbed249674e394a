# make24/games/core/coerce_utils.py
import math
from typing import List


def coerce_number_list(val) -> List[float]:
    """
    Coerce request input to a list of finite numbers; [] when unusable.
      [4, "1", 8.0] -> [4.0, 1.0, 8.0]
      "4,1,8,7" / "[4, 1, 8, 7]" -> [4.0, 1.0, 8.0, 7.0]
    """
    if val is None:
        return []
    if isinstance(val, str):
        val = [p.strip() for p in val.replace("[", "").replace("]", "").split(",") if p.strip()]
    if not isinstance(val, (list, tuple)):
        return []
    try:
        out = [float(x) for x in val if not isinstance(x, bool)]
    except (TypeError, ValueError):
        return []
    if len(out) != len(val) or not all(math.isfinite(x) for x in out):
        return []
    return out
