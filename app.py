# app.py - upload a daily inventory workbook, then browse the ledger it produced.

import pandas as pd
import streamlit as st

from stockledger.analytics import list_products, load_ledger, product_kpis, product_series, resolve_date_range
from stockledger.db import SessionLocal, engine, init_db
from stockledger.logger import setup_logger
from stockledger.service import ingest_upload

setup_logger("stockledger")
init_db(engine)

st.set_page_config(page_title="Stock Ledger", layout="wide")
st.title("📦 Daily Inventory Ledger")

# ---------- Upload ----------
uploaded = st.file_uploader("Upload inventory workbook (.xlsx or .xls)", type=["xlsx", "xls"])
if uploaded is not None and st.button("Process file"):
    status, body = ingest_upload(uploaded.name, uploaded.getvalue(), SessionLocal)
    if status == 200:
        s = body["summary"]
        st.success(f"Processed {s['productsProcessed']} product(s), created {s['recordsCreated']} record(s).")
    else:
        st.error(body["error"])
        for line in body.get("details", []):
            st.write(f"- {line}")

# ---------- Ledger ----------
with SessionLocal() as session:
    products = list_products(session)

if not products:
    st.info("No product data found. Upload an Excel file to get started.")
    st.stop()

st.sidebar.header("Filters")
labels = {p.id: f"{p.name} ({p.product_code})" for p in products}
picked = st.sidebar.multiselect(
    "Products", options=list(labels), format_func=labels.get, default=[products[0].id], max_selections=5,
)
range_key = st.sidebar.selectbox(
    "Date range", ["all", "last7", "thisMonth", "custom"],
    format_func={"all": "All", "last7": "Last 7 days", "thisMonth": "This month", "custom": "Custom"}.get,
)
start = end = None
if range_key == "custom":
    start = st.sidebar.date_input("From", value=None)
    end = st.sidebar.date_input("To", value=None)

if not picked:
    st.info("Pick at least one product.")
    st.stop()

with SessionLocal() as session:
    frame = load_ledger(session, picked, resolve_date_range(range_key, start, end))

if frame.empty:
    st.warning("No daily records found for the selected products.")
    st.stop()

series = product_series(frame)
inventory = pd.DataFrame({
    s["productName"]: pd.Series({p["recordDate"]: p["inventory"] for p in s["data"]})
    for s in series
})
st.subheader("Closing inventory")
st.line_chart(inventory)

st.subheader("Key performance indicators")
kpis = pd.DataFrame(product_kpis(frame)).drop(columns=["productId"])
st.dataframe(kpis, use_container_width=True)
