from __future__ import annotations
import streamlit as st

from emojimosaic.config import DEFAULT_TILES_DIR, TILE_RENDER_SIZE, MosaicConfig
from emojimosaic.core import utils
from emojimosaic.core.errors import MosaicError
from emojimosaic.pipeline import Mosaic


@st.cache_resource
def load_mosaic(tiles_dir: str, pixels: int) -> Mosaic:
    return Mosaic(tiles_dir, pixels)


st.set_page_config(page_title="emojimosaic", page_icon="🧩", layout="wide")

st.title("emojimosaic — Turn any image into an animated emoji mosaic")

with st.sidebar:
    st.header("⚙️ Settings")
    tiles_dir = st.text_input("Emoji directory", value=DEFAULT_TILES_DIR)
    pixels = st.slider("Emoji size (pixels)", 1, TILE_RENDER_SIZE, 12)
    scale = st.slider("Output scale", 0.25, 8.0, 1.0, step=0.25)
    frames = st.slider("Frames", 1, 20, 5)
    jitter = st.slider("Jitter (nearest emojis to choose from)", 1, 8, 3)
    delay = st.slider("Frame delay (centiseconds)", 1, 100, 20)
    run_button = st.button("🚀 Generate")

src_file = st.file_uploader("Source image", type=["jpg", "jpeg", "png"], key="src")

if run_button:
    if not src_file:
        st.error("Please upload an image.")
        st.stop()

    config = MosaicConfig(
        input_path=src_file.name,
        tiles_dir=tiles_dir,
        block_size=pixels,
        scale=scale,
        frames=frames,
        jitter=jitter,
        delay=delay,
    )
    try:
        config.validate()
        st.write("Loading emoji images...")
        mosaic = load_mosaic(tiles_dir, pixels)
        image = utils.decode_image(src_file.getvalue())
        st.write("Rendering frames... ⏳")
        data = mosaic.render(image, config)
    except (MosaicError, OSError) as exc:
        st.error(str(exc))
        st.stop()

    st.success(f"✅ Done! {len(mosaic.catalog)} emojis, {frames} frame(s).")
    st.image(data, caption="Emoji mosaic")

    st.download_button("⬇️ Download GIF", data=data, file_name="mosaic.gif")
