import requests
import streamlit as st

from config import Config

# -------------------- SESSION STATE --------------------
if "result" not in st.session_state:
    st.session_state.result = None

if "pain_point" not in st.session_state:
    st.session_state.pain_point = None

if "total_clicks" not in st.session_state:
    st.session_state.total_clicks = 0

# -------------------- UI --------------------
st.set_page_config(page_title="Pain Map Explorer")

st.title("Pain Map Explorer")
st.caption("Check which body region a model-local click position resolves to.")
st.info(f"Points classified this session: {st.session_state.total_clicks}")

col_x, col_y, col_z = st.columns(3)
with col_x:
    x = st.number_input("x (left - / right +)", min_value=-1.0, max_value=1.0, value=0.0, step=0.01, format="%.3f")
with col_y:
    y = st.number_input("y (feet 0 / head 1)", min_value=0.0, max_value=1.0, value=0.64, step=0.01, format="%.3f")
with col_z:
    z = st.number_input("z (back - / front +)", min_value=-1.0, max_value=1.0, value=0.02, step=0.005, format="%.3f")

pain_level = st.slider("Pain level", min_value=0, max_value=10, value=5)
notes = st.text_area("Notes", height=80, max_chars=Config.MAX_NOTES_LENGTH)


def post(path, payload):
    response = requests.post(f"{Config.API_URL}{path}", json=payload, timeout=Config.REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()


col1, col2 = st.columns(2)

# -------- CLASSIFY BUTTON --------
with col1:
    if st.button("Classify Point"):
        point = {"x": x, "y": y, "z": z}
        st.session_state.result = None
        st.session_state.pain_point = None
        try:
            result = post("/classify", point)
            pain_point = post("/pain-points", {**point, "painLevel": pain_level, "notes": notes})
            st.session_state.result = result
            st.session_state.pain_point = pain_point
            st.session_state.total_clicks += 1
        except requests.RequestException as e:
            st.error("Region API error:")
            st.code(str(e))

# -------- CLEAR BUTTON --------
with col2:
    if st.button("Clear"):
        st.session_state.clear()
        st.rerun()

# -------------------- DISPLAY --------------------
if st.session_state.result:

    data = st.session_state.result

    st.subheader(f"Region: {data.get('region', '')}")
    st.write(f"**{data.get('label', '')}** ({data.get('medicalTerm', '')})")

    if data.get("fallback"):
        st.warning(f"No precise rule matched; coarse bucket used ({data.get('rule', '')}).")
    else:
        st.success(f"Matched rule: {data.get('rule', '')}")

    if st.session_state.pain_point:
        st.write("### Pain Point Record")
        st.json(st.session_state.pain_point)
