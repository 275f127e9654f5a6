import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path so `src` package imports work when run via streamlit
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from services.upload_service import get_ingestion_service, get_storage
from src.ingestion.models import UploadItem
from src.storage.errors import StorageError


st.set_page_config(page_title="File Upload", page_icon="📁", layout="centered")
st.title("Upload Files")

service = get_ingestion_service()

with st.form("upload", clear_on_submit=True):
    selected = st.file_uploader("Choose files", accept_multiple_files=True)
    submitted = st.form_submit_button("Upload")

if submitted:
    items = [UploadItem(name=f.name, content=f, size=f.size) for f in selected or []]
    with st.spinner("Uploading..."):
        result = service.ingest(items)
    if result.success:
        st.success(result.message)
    else:
        st.error(result.message)

st.subheader("Uploaded files")
storage = get_storage()
try:
    storage.ensure_exists()
    names = storage.list_files()
except StorageError:
    st.warning("File storage is currently unavailable.")
    names = []

if names:
    for name in names:
        st.write(f"- {name}")
else:
    st.caption("No files uploaded yet.")
