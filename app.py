# app.py
import json
import logging
import os

import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from services.gitlab_service import GitLabService
from services.users import ReadUsersOptions, read_users
from utils.helper import entity_rows

load_dotenv()  # load .env if present
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="GitLab → Catalog Users", layout="wide")

st.title("👥 GitLab → Catalog Users")

with st.sidebar:
    st.header("Connection Settings")
    gitlab_base = st.text_input("GitLab base URL", os.getenv("GITLAB_BASE", "https://gitlab.com"))
    gitlab_token = st.text_input("GitLab Private Token", os.getenv("GITLAB_TOKEN", ""), type="password")

    st.markdown("---")
    st.subheader("Target")
    target = st.text_input(
        "Group URL or instance root",
        os.getenv("GITLAB_TARGET", os.getenv("GITLAB_BASE", "https://gitlab.com")),
    )
    inherited = st.checkbox("Include inherited group members", value=True)
    blocked = st.checkbox("Include blocked accounts", value=False)

    st.markdown("---")
    st.write("Notes:")
    st.write("- The token needs the read_api scope")
    st.write("- Instance-wide listing only works on self-managed hosts")
    fetch_btn = st.button("Read users")

def validate_inputs():
    missing = []
    if not gitlab_base: missing.append("GitLab base")
    if not target: missing.append("Target")
    return missing

if fetch_btn:
    missing = validate_inputs()
    if missing:
        st.error(f"Missing: {', '.join(missing)}")
    else:
        client = GitLabService(gitlab_base, gitlab_token)
        options = ReadUsersOptions(inherited=inherited, blocked=blocked)

        entities = None
        with st.spinner(f"Reading users from {target}"):
            try:
                entities = read_users(client, target, options)
            except Exception as e:
                st.error(f"Error reading users from {target}: {e}")

        if entities:
            df = pd.DataFrame(entity_rows(entities))
            st.subheader(f"Users ({len(df)})")
            st.dataframe(df, use_container_width=True)

            csv = df.to_csv(index=False).encode("utf-8")
            st.download_button("Download CSV", csv, "gitlab_users.csv", "text/csv")
            st.download_button(
                "Download entities (JSON)",
                json.dumps(entities, indent=2).encode("utf-8"),
                "gitlab_user_entities.json",
                "application/json",
            )
        elif entities is not None:
            st.info("No users found for this target.")
