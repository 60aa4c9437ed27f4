import numpy as np
import pytest
from emojimosaic.core import catalog, index, planner
from conftest import solid

def _setup(tiles_dir, size):
    cat = catalog.load_catalog(tiles_dir, size)
    return cat, index.build_index(catalog.catalog_colors(cat))

def test_transparent_block_has_no_entry(red_blue_tiles):
    cat, idx = _setup(red_blue_tiles, 2)
    img = np.zeros((2, 4, 4), dtype=np.uint8)
    img[:, 2:] = (255, 0, 0, 255)

    sim = planner.plan(idx, cat, img, 2, 1.0, jitter=1)

    assert (0, 0) not in sim
    assert sim.candidates((0, 0)) == ()
    assert sim.pick((0, 0), np.random.default_rng(0)) is None
    assert [r.name for r in sim.candidates((2, 0))] == ["red.png"]
    # overshoot cell resamples the last full window
    assert [r.name for r in sim.candidates((4, 0))] == ["red.png"]

def test_keys_are_in_source_space(red_blue_tiles):
    cat, idx = _setup(red_blue_tiles, 2)
    img = solid((0, 0, 250, 255), size=(3, 3))

    sim = planner.plan(idx, cat, img, 2, 2.0, jitter=1)

    # destination grid 0,2,4,6 maps back to source 0,1,2,3
    assert len(sim) == 16
    assert set(sim.keys()) == {(x, y) for x in range(4) for y in range(4)}
    assert all(sim.candidates(k)[0].name == "blue.png" for k in sim.keys())

def test_jitter_candidates_are_nearest_first(rainbow_tiles):
    cat, idx = _setup(rainbow_tiles, 1)
    img = solid((250, 5, 5, 255), size=(1, 1))

    sim = planner.plan(idx, cat, img, 1, 1.0, jitter=3)

    names = [r.name for r in sim.candidates((0, 0))]
    assert names[0] == "tile_0.png"
    assert set(names) == {"tile_0.png", "tile_1.png", "tile_2.png"}

def test_map_is_read_only(red_blue_tiles):
    cat, idx = _setup(red_blue_tiles, 2)
    sim = planner.plan(idx, cat, solid((255, 0, 0, 255), size=(2, 2)), 2, 1.0)
    with pytest.raises(TypeError):
        sim._entries[(9, 9)] = ()
    assert (9, 9) not in sim
