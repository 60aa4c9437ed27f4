import imageio.v3 as iio
import pytest
from emojimosaic.core import render
from emojimosaic.visualization import animation
from conftest import solid

def _frames():
    colors = [(255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255)]
    return [render.quantize_frame(solid(c, size=(4, 3))) for c in colors]

def test_assemble_preserves_order_and_count():
    data = animation.assemble(_frames(), animation.uniform_delays(3))
    assert data[:6] == b"GIF89a"

    decoded = iio.imread(data, index=None, extension=".gif")
    assert decoded.shape[0] == 3
    assert decoded.shape[1:3] == (3, 4)
    firsts = [tuple(int(c) for c in f[0, 0, :3]) for f in decoded]
    assert firsts == [(255, 0, 0), (0, 255, 0), (0, 0, 255)]

def test_assemble_writes_delays():
    data = animation.assemble(_frames(), [20, 30, 40])
    meta = [iio.immeta(data, index=i, extension=".gif") for i in range(3)]
    assert [m["duration"] for m in meta] == [200, 300, 400]

def test_assemble_rejects_mismatched_delays():
    with pytest.raises(ValueError):
        animation.assemble(_frames(), [20])
    with pytest.raises(ValueError):
        animation.assemble([], [])

def test_save_animation(tmp_path):
    out = tmp_path / "anim.gif"
    data = animation.save_animation(str(out), _frames(), [20, 20, 20])
    assert out.read_bytes() == data

def test_identical_frames_are_kept():
    frame = render.quantize_frame(solid((255, 0, 0, 255), size=(4, 3)))
    data = animation.assemble([frame, frame.copy(), frame.copy()], [10, 20, 30])
    decoded = iio.imread(data, index=None, extension=".gif")
    assert decoded.shape[0] == 3
    meta = [iio.immeta(data, index=i, extension=".gif") for i in range(3)]
    assert [m["duration"] for m in meta] == [100, 200, 300]

def test_assemble_rejects_mixed_sizes():
    a = render.quantize_frame(solid((255, 0, 0, 255), size=(4, 3)))
    b = render.quantize_frame(solid((255, 0, 0, 255), size=(3, 3)))
    with pytest.raises(ValueError):
        animation.assemble([a, b], [20, 20])
