import streamlit as st

def inject_css():
    st.markdown("""
    <style>
    .stButton>button, .stDownloadButton>button {
      background-color: #3A7BD5 !important;
      color: white !important;
      border: 1px solid #316bb8 !important;
      border-radius: 8px !important;
    }
    .stButton>button:hover, .stDownloadButton>button:hover {
      background-color: #356fbe !important;
      border-color: #2f63a8 !important;
    }
    .unhealthy-list { color: #dc2626; }
    .analysis-box {
      background-color: #f3f4f6;
      padding: 1rem;
      border-radius: 6px;
    }
    </style>
    """, unsafe_allow_html=True)
