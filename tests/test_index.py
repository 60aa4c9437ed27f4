import numpy as np
import pytest
from emojimosaic.core import index
from emojimosaic.core.errors import SpatialQueryError

def _colors(n, seed=1):
    rng = np.random.default_rng(seed)
    return {f"t{i}": tuple(int(c) for c in rng.integers(0, 256, size=4)) for i in range(n)}

def test_nearest_is_k_nearest():
    colors = _colors(60)
    idx = index.build_index(colors)
    rng = np.random.default_rng(2)
    for _ in range(30):
        q = rng.integers(0, 256, size=4)
        for k in (1, 3, 7):
            got = idx.nearest(k, q)
            assert len(got) == k
            dist = {name: np.linalg.norm(np.array(c, float) - q) for name, c in colors.items()}
            chosen = {r.name for r in got}
            worst = max(dist[n] for n in chosen)
            assert all(dist[n] >= worst - 1e-9 for n in dist if n not in chosen)
            d = [dist[r.name] for r in got]
            assert d == sorted(d)

def test_k_capped_at_catalog_size():
    idx = index.build_index({"a": (1, 2, 3, 255), "b": (9, 9, 9, 255)})
    assert len(idx) == 2
    assert len(idx.nearest(5, (0, 0, 0, 255))) == 2
    assert idx.nearest(1, (0, 0, 0, 255))[0].name == "a"

def test_record_has_degenerate_bounds():
    rec = index.TileRecord("x", index.color_to_point((1, 2, 3, 4)))
    assert rec.key == (1.0, 2.0, 3.0, 4.0)
    assert rec.bounds == (rec.key, rec.key)

def test_malformed_query_raises():
    idx = index.build_index({"a": (1, 2, 3, 255)})
    with pytest.raises(SpatialQueryError):
        idx.nearest(1, (1, 2, 3))
    with pytest.raises(SpatialQueryError):
        idx.nearest(1, (float("nan"), 0, 0, 0))
    with pytest.raises(SpatialQueryError):
        idx.nearest(0, (0, 0, 0, 0))
