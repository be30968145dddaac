# app.py
import logging

import requests
import streamlit as st

from config import API_URL, LOG_LEVEL, MAX_IMAGE_SIZE
from styles import inject_css
from core.client import describe_error, post_image
from core.image_utils import ImageBlob, normalize_image
from core.render import process_text, unhealthy_list_html
from core.utils import make_downloads

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ----------------------------------------------------
# Streamlit page + styles
# ----------------------------------------------------
st.set_page_config(page_title="Food Ingredient Identifier", page_icon="🍎", layout="centered")
inject_css()

st.title("🍎 Food Ingredient Identifier")
st.caption(
    "Upload a photo of a food package. The ingredient list is read by Gemini, "
    "checked against a curated list of unhealthy ingredients, and summarized."
)

# ----------------------------------------------------
# Session state (defaults)
# ----------------------------------------------------
defaults = {
    "file": None,             # ImageBlob, already resized
    "ingredients": "",
    "analysis": "",
    "found_unhealthy": [],
    "loading": False,
    "error": None,
    "upload_warning": None,
}
for k, v in defaults.items():
    if k not in st.session_state:
        st.session_state[k] = v

# ----------------------------------------------------
# Callbacks
# ----------------------------------------------------
def _warn_resize_failed(e):
    st.session_state.upload_warning = f"Could not resize image, uploading the original: {e}"


def _on_file_change():
    uploaded = st.session_state.get("upload_input")
    st.session_state.upload_warning = None
    if uploaded is None:
        st.session_state.file = None
        return
    original = ImageBlob(
        data=uploaded.getvalue(),
        mime_type=uploaded.type or "application/octet-stream",
        filename=uploaded.name,
    )
    logger.info("Original file size: %d", original.size)
    resized = normalize_image(original, MAX_IMAGE_SIZE, on_error=_warn_resize_failed)
    logger.info("Resized file size: %d", resized.size)
    st.session_state.file = resized
    st.session_state.error = None


def _on_submit():
    if st.session_state.file is None:
        return
    st.session_state.loading = True
    st.session_state.error = None


# ----------------------------------------------------
# Upload form
# ----------------------------------------------------
st.file_uploader(
    "Upload Image",
    type=["png", "jpg", "jpeg", "webp", "gif", "bmp"],
    key="upload_input",
    on_change=_on_file_change,
    disabled=st.session_state.loading,
)

if st.session_state.upload_warning:
    st.warning(st.session_state.upload_warning)

if st.session_state.file is not None:
    st.caption(f"Selected file: {st.session_state.file.filename}")

st.button(
    "Analyzing..." if st.session_state.loading else "Analyze Ingredients",
    key="analyze",
    on_click=_on_submit,
    disabled=st.session_state.file is None or st.session_state.loading,
)

# ----------------------------------------------------
# Request in flight
# ----------------------------------------------------
if st.session_state.loading:
    with st.spinner("Analyzing image... This may take a moment."):
        try:
            data = post_image(st.session_state.file, API_URL)
            st.session_state.ingredients = data.get("ingredients", "")
            st.session_state.analysis = data.get("analysis", "")
            st.session_state.found_unhealthy = data.get("foundUnhealthy") or []
        except (requests.RequestException, ValueError) as e:
            logger.error("Error analyzing image: %s", e)
            st.session_state.error = describe_error(e)
        finally:
            st.session_state.loading = False
    st.rerun()

# ----------------------------------------------------
# Results
# ----------------------------------------------------
if st.session_state.error:
    st.markdown("## Error:")
    st.code(st.session_state.error, language="json")

if st.session_state.ingredients:
    st.markdown("## Ingredients:")
    st.text(st.session_state.ingredients)

if st.session_state.found_unhealthy:
    st.markdown("## Unhealthy Ingredients Found (Predefined List):")
    st.markdown(unhealthy_list_html(st.session_state.found_unhealthy), unsafe_allow_html=True)

if st.session_state.analysis:
    st.markdown("## Analysis:")
    st.markdown(
        f'<div class="analysis-box">{process_text(st.session_state.analysis)}</div>',
        unsafe_allow_html=True,
    )

    json_bytes, txt_bytes = make_downloads({
        "ingredients": st.session_state.ingredients,
        "analysis": st.session_state.analysis,
        "foundUnhealthy": st.session_state.found_unhealthy,
    })
    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "⬇️ Download JSON", data=json_bytes, file_name="ingredient_report.json",
            mime="application/json", key="dl_json"
        )
    with c2:
        st.download_button(
            "⬇️ Download TXT", data=txt_bytes, file_name="ingredient_report.txt",
            mime="text/plain", key="dl_txt"
        )
