# ui/streamlit_app.py
import os
import re
import json
from typing import Any, Dict, List, Optional, Tuple

import requests
import streamlit as st


# ----------------- helpers: safe secrets/env -----------------
def safe_secret(key: str, default=None):
    """
    Read from Streamlit secrets first (if present), else from env, else default.
    """
    try:
        return st.secrets.get(key, os.environ.get(key, default))  # type: ignore[attr-defined]
    except Exception:
        return os.environ.get(key, default)


# ----------------- configuration -----------------
st.set_page_config(page_title="IR Engine — Search", layout="wide")
st.title("🔎 TF-IDF Search")

DEBUG = (safe_secret("DEBUG", "0") == "1")
API_BASE = safe_secret("API_BASE", None)  # e.g. http://127.0.0.1:8000

if DEBUG:
    st.sidebar.caption("API base (debug)")
    api_base = st.sidebar.text_input(
        "Base URL",
        value=(API_BASE or "http://127.0.0.1:8000"),
    ).rstrip("/")
else:
    api_base = (API_BASE or "").rstrip("/")

if not api_base:
    st.error(
        "API_BASE is not configured. Set it as an environment variable or Streamlit secret.\n\n"
        "Example value: http://127.0.0.1:8000"
    )
    st.stop()

def _headers() -> Dict[str, str]:
    return {"Content-Type": "application/json", "Accept": "application/json"}

if st.sidebar.button("Check API health"):
    try:
        r = requests.get(f"{api_base}/healthz", headers=_headers(), timeout=10)
        r.raise_for_status()
        st.sidebar.success(r.json())
    except requests.RequestException as e:
        st.sidebar.error(f"Health failed: {e}")

st.sidebar.caption(f"API: {api_base}")


# ----------------- HTTP -----------------
def post_json(path: str, body: Optional[Dict[str, Any]] = None, timeout: int = 60) -> Dict[str, Any]:
    url = f"{api_base}{path}"
    r = requests.post(url, json=body, headers=_headers(), timeout=timeout)
    r.raise_for_status()
    return r.json()

def get_json(path: str, params: Optional[Dict[str, Any]] = None, timeout: int = 60) -> Dict[str, Any]:
    r = requests.get(f"{api_base}{path}", params=params, headers=_headers(), timeout=timeout)
    r.raise_for_status()
    return r.json()

def _detail(e: requests.RequestException) -> str:
    resp = getattr(e, "response", None)
    if resp is not None:
        try:
            return str(resp.json().get("detail", resp.text))
        except ValueError:
            return resp.text
    return str(e)


# ----------------- document parsing -----------------
_SPLIT_RE = re.compile(r"\t|\s+\|\s+")

def parse_documents(text: str) -> List[Tuple[str, str]]:
    """
    One document per line: "id<TAB>body" or "id | body".
    Lines without a separator get a positional id.
    """
    docs: List[Tuple[str, str]] = []
    for i, ln in enumerate(text.splitlines(), start=1):
        if not ln.strip():
            continue
        parts = _SPLIT_RE.split(ln, maxsplit=1)
        if len(parts) == 2 and parts[0].strip():
            docs.append((parts[0].strip(), parts[1].strip()))
        else:
            docs.append((f"doc{i}", ln.strip()))
    return docs


# ----------------- inputs -----------------
left, right = st.columns(2)

with left:
    st.subheader("Corpus")
    corpus_text = st.text_area(
        "Documents (one per line: id | body)",
        placeholder="doc1 | The cat sat on the mat\ndoc2 | The dog sat on the log",
        height=260,
    )
    b1, b2, b3 = st.columns([1, 1, 1])
    add_clicked = b1.button("Add documents", type="primary", use_container_width=True)
    build_clicked = b2.button("Build", use_container_width=True)
    reset_clicked = b3.button("Reset", use_container_width=True)

with right:
    st.subheader("Query")
    query_text = st.text_input("Search text", placeholder="cat")
    top_k = st.number_input("Top k (0 = all)", min_value=0, value=10, step=1)
    search_clicked = st.button("Search", type="primary", use_container_width=True)

st.markdown("---")


# ----------------- actions -----------------
if reset_clicked:
    try:
        post_json("/reset")
        st.info("Corpus cleared.")
    except requests.RequestException as e:
        st.error(f"Reset failed: {_detail(e)}")

if add_clicked:
    docs = parse_documents(corpus_text)
    if not docs:
        st.error("Paste at least one document.")
    else:
        with st.spinner("Adding documents…"):
            try:
                data = post_json("/documents", {"documents": [{"id": i, "body": b} for i, b in docs]})
                st.success(f"Added {data['added']} documents · corpus size {data['total']}. Build before searching.")
            except requests.RequestException as e:
                st.error(f"Add failed: {_detail(e)}")

if build_clicked:
    with st.spinner("Building TF-IDF model…"):
        try:
            data = post_json("/build")
            st.success(f"Built: **{data['documents']}** documents · vocabulary **{data['vocabulary']}**")
        except requests.RequestException as e:
            st.error(f"Build failed: {_detail(e)}")

if search_clicked:
    if not query_text.strip():
        st.error("Type something to search for.")
    else:
        body: Dict[str, Any] = {"text": query_text}
        if top_k:
            body["top_k"] = int(top_k)
        with st.spinner("Searching…"):
            try:
                data = post_json("/query", body)
                results = data.get("results", [])
                st.subheader(f"Results ({len(results)})")
                if not results:
                    st.caption("No document shares a weighted term with the query.")
                for rank, res in enumerate(results, start=1):
                    st.markdown(f"{rank}. **{res['id']}** · score {res['score']:.4f}")
            except requests.RequestException as e:
                st.error(f"Search failed: {_detail(e)}")

with st.expander("Model dump (read-only)"):
    if st.button("Load model"):
        try:
            st.code(json.dumps(get_json("/model"), indent=2), language="json")
        except requests.RequestException as e:
            st.error(f"Model export failed: {_detail(e)}")
