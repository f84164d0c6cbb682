import datetime
import logging

import pandas as pd
import streamlit as st

from api.client import GREETING, ask_assistant
from config import load_settings
from core.catalog import PRICE_CATALOG
from core.converters import format_money
from core.models import CircuitInput, ConductorMaterial, DropStatus, SystemType
from engines.export import comparison_frame, comparison_to_excel, quote_to_excel
from engines.pricing import PriceLogic
from engines.tables import CROSS_SECTIONS
from engines.voltage_drop import VoltageDropLogic

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

BRAND = "Electro service & installation"

# --- Page Config ---
st.set_page_config(
    page_title=BRAND,
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- Custom CSS ---
st.markdown("""
<style>
    .main-header { font-family: 'Inter', sans-serif; color: #047857; font-weight: 700; }
    .stDataFrame { border-radius: 10px; overflow: hidden; }
    .footer { color: #64748b; font-size: 0.8rem; text-align: center; margin-top: 3rem; }
</style>
""", unsafe_allow_html=True)

# --- Static Content ---
SERVICES = [
    ("Distribution boards", "Mounting, wiring, circuit labelling, RCDs, surge protection."),
    ("Complete wiring", "New builds and renovations: design, routing, connection, measurements."),
    ("Sockets and switches", "Replacement, extra circuits, three-phase sockets, smart controls."),
    ("Lighting and chandeliers", "Fixture mounting, dimming, LED strips, motion detectors."),
    ("Hobs and appliances", "Connection, protection, inspection of the connection, report."),
    ("Service and inspections", "Fault finding, loop measurements, RCD tests, test reports."),
]

PRICE_LIST = pd.DataFrame([
    ("Distribution board installation (apartment)", "180 €", "up to 12 modules, without inspection"),
    ("Complete socket circuit", "70 €", "1 breaker, up to 4 sockets"),
    ("Socket replacement / new socket", "15 €", "standard installation"),
    ("Switch (two-way, intermediate)", "18 €", "including wiring"),
    ("Chandelier / light fixture mounting", "25 €", "standard ceiling height"),
    ("Hob connection (3-phase)", "45 €", "protection and PE check"),
    ("Service hourly rate", "30 €", "fault diagnostics"),
], columns=["Service", "Price from", "Note"])

GALLERY = [
    ("https://placehold.co/800x600?text=Distribution%20board", "Distribution board"),
    ("https://placehold.co/800x600?text=Apartment%20wiring", "Apartment wiring"),
    ("https://placehold.co/800x600?text=Sockets", "Socket wiring"),
    ("https://placehold.co/800x600?text=Switches", "Switches and controls"),
    ("https://placehold.co/800x600?text=Light%20fixtures", "Light fixture mounting"),
    ("https://placehold.co/800x600?text=Hob%20(3F)", "Hob connection (3-phase)"),
    ("https://placehold.co/800x600?text=Panel%20renovation", "Panel renovation"),
    ("https://placehold.co/800x600?text=Measurement", "Measurement and inspection"),
    ("https://placehold.co/800x600?text=Service", "Service and repairs"),
]

SYSTEM_LABELS = {
    SystemType.DC: "DC (2 conductors)",
    SystemType.SINGLE_PHASE: "1-phase AC (2 conductors)",
    SystemType.THREE_PHASE: "3-phase AC",
}
MATERIAL_LABELS = {ConductorMaterial.COPPER: "Copper", ConductorMaterial.ALUMINUM: "Aluminium"}

PAGES = ["Home", "Voltage drop calculator", "Price estimate", "Assistant (AI)"]

# --- Session State Init ---
if "quote" not in st.session_state:
    st.session_state.quote = PriceLogic.new_state()

if "chat_messages" not in st.session_state:
    st.session_state.chat_messages = [{"role": "assistant", "content": GREETING}]

def fmt(value: float) -> str:
    return format_money(value, settings.money_locale)

# --- Helper: keep quote widgets in step with QuoteState ---
def sync_quote_widgets():
    q = st.session_state.quote
    for item in PRICE_CATALOG:
        if item.key == "circuit":
            st.session_state["chk_circuit"] = q.quantity("circuit") > 0
        else:
            st.session_state[f"qty_{item.key}"] = q.quantity(item.key)
    st.session_state["in_materials"] = q.materials_cost
    st.session_state["in_km"] = q.distance_km
    st.session_state["in_rate"] = q.rate_per_km
    st.session_state["in_callout"] = q.callout_fee
    st.session_state["in_discount"] = q.discount_pct
    st.session_state["in_vat"] = q.vat_pct

if "qty_panel" not in st.session_state:
    sync_quote_widgets()

def on_quantity_change(key: str):
    st.session_state.quote.set_quantity(key, st.session_state[f"qty_{key}"])
    sync_quote_widgets()

def on_circuit_toggle():
    st.session_state.quote.set_circuit_package(st.session_state["chk_circuit"])
    sync_quote_widgets()

def on_scalar_change(widget_key: str, setter_name: str):
    getattr(st.session_state.quote, setter_name)(st.session_state[widget_key])
    sync_quote_widgets()

def on_reset():
    st.session_state.quote.reset_all()
    sync_quote_widgets()

def footer(suffix: str):
    year = datetime.date.today().year
    st.markdown(f"<div class='footer'>© {year} {BRAND} – {suffix}</div>", unsafe_allow_html=True)

# --- Pages ---
def render_home():
    st.markdown("<h1 class='main-header'>Professional electrical installation – apartment, house, business</h1>",
                unsafe_allow_html=True)
    st.write("Distribution boards, complete wiring, sockets, switches, chandeliers, hobs, "
             "inspections and service. Clean, safe and up to standard.")

    hero = st.columns(3)
    for i, (src, alt) in enumerate(GALLERY[:6]):
        hero[i % 3].image(src, caption=alt, use_container_width=True)

    st.markdown("---")
    st.subheader("Services")
    cols = st.columns(3)
    for i, (title, desc) in enumerate(SERVICES):
        with cols[i % 3]:
            st.markdown(f"**{i + 1}. {title}**")
            st.caption(desc)

    st.markdown("---")
    st.subheader("Indicative price list")
    st.caption("Prices are indicative, the final offer follows an on-site visit. Material is not included unless stated.")
    st.dataframe(PRICE_LIST, hide_index=True, use_container_width=True)

    st.markdown("---")
    st.subheader("Gallery")
    g_cols = st.columns(3)
    for i, (src, alt) in enumerate(GALLERY):
        g_cols[i % 3].image(src, caption=alt, use_container_width=True)

    st.markdown("---")
    st.subheader("Contact")
    st.write("Tell me what you need help with – I'll get back to you and we'll arrange a visit.")
    with st.form("contact"):
        name = st.text_input("Name")
        st.text_input("Phone")
        email = st.text_input("E-mail")
        message = st.text_area("Describe the request (place, type of work, date)…", height=120)
        if st.form_submit_button("Send", type="primary"):
            if not name or not email or not message:
                st.error("Please fill in name, e-mail and the request.")
            else:
                st.success("Thank you! This is a sample form – it will be connected to e-mail or Forms.")

    footer("professional electrical installations")

def render_voltage_drop():
    st.markdown("<h1 class='main-header'>⚡ Voltage drop calculator</h1>", unsafe_allow_html=True)
    st.caption("The result is informative. In practice follow IEC/national standards, installation method, "
               "temperature, cable grouping and protection.")

    c_in, c_out = st.columns(2)
    with c_in:
        c1, c2 = st.columns(2)
        system = c1.selectbox("System", list(SYSTEM_LABELS), index=1, format_func=SYSTEM_LABELS.get)
        material = c2.selectbox("Material", list(MATERIAL_LABELS), format_func=MATERIAL_LABELS.get)
        c3, c4 = st.columns(2)
        voltage = c3.number_input("Voltage U (V)", value=230.0, step=1.0)
        current = c4.number_input("Current I (A)", value=16.0, step=1.0)
        c5, c6 = st.columns(2)
        length = c5.number_input("Length L (m)", value=25.0, step=1.0,
                                 help="Distance to the load – length of one conductor.")
        section = c6.selectbox("Cross-section S (mm²)", CROSS_SECTIONS, index=1)
        target = st.number_input("Target max. drop (%)", value=3.0, step=0.5)

    circuit = CircuitInput(
        system=system, material=material, voltage_v=voltage, current_a=current,
        length_m=length, cross_section_mm2=section, target_drop_pct=target,
    )
    result = VoltageDropLogic.evaluate(circuit)

    with c_out:
        m1, m2 = st.columns(2)
        m1.metric("Drop ΔU", f"{result.drop_volts:.2f} V")
        m2.metric("Drop in %", f"{result.drop_percent:.2f} %")
        if result.status == DropStatus.OK:
            st.success(result.status_label)
        elif result.status == DropStatus.WARNING:
            st.warning(result.status_label)
        else:
            st.error(result.status_label)
        st.write(f"Recommended nearest cross-section for a {target:g} % target: "
                 f"**{result.recommended_section_mm2:g} mm²**")

        st.markdown("##### Quick comparison (current I, L, U)")
        st.dataframe(comparison_frame(result), hide_index=True, use_container_width=True)
        st.caption("Ampacity is indicative only. It depends on installation method, temperature, grouping and standard.")
        st.download_button(
            "📥 Comparison (Excel)",
            data=comparison_to_excel(result),
            file_name="voltage_drop_comparison.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    footer("calculator")

def render_price_estimate():
    st.markdown("<h1 class='main-header'>💶 Price estimate</h1>", unsafe_allow_html=True)
    st.caption("Enter the amount of work, material and travel. The result is indicative – final offer after a visit.")
    quote = st.session_state.quote

    c_in, c_out = st.columns([1.35, 1])
    with c_in:
        cols = st.columns(2)
        for i, item in enumerate(PRICE_CATALOG):
            label = f"{item.label} ({item.unit}, {fmt(item.unit_price)}/{item.unit})"
            col = cols[i % 2]
            if item.key == "circuit":
                col.checkbox(label, key="chk_circuit", on_change=on_circuit_toggle)
            else:
                col.number_input(label, min_value=0, step=1, key=f"qty_{item.key}",
                                 on_change=on_quantity_change, args=(item.key,))

        st.markdown("---")
        s1, s2 = st.columns(2)
        s1.number_input("Material (total, €)", min_value=0.0, step=1.0, key="in_materials",
                        on_change=on_scalar_change, args=("in_materials", "set_materials_cost"))
        s2.number_input("Travel – km (there and back)", min_value=0.0, step=1.0, key="in_km",
                        on_change=on_scalar_change, args=("in_km", "set_distance_km"))
        s3, s4, s5 = st.columns(3)
        s3.number_input("Rate €/km", min_value=0.0, step=0.01, format="%.2f", key="in_rate",
                        on_change=on_scalar_change, args=("in_rate", "set_rate_per_km"))
        s4.number_input("Callout (flat, €)", min_value=0.0, step=1.0, key="in_callout",
                        on_change=on_scalar_change, args=("in_callout", "set_callout_fee"))
        s5.number_input("Discount (%)", min_value=0.0, max_value=100.0, step=1.0, key="in_discount",
                        on_change=on_scalar_change, args=("in_discount", "set_discount_pct"))
        st.number_input("VAT (%)", min_value=0.0, max_value=99.0, step=1.0, key="in_vat",
                        on_change=on_scalar_change, args=("in_vat", "set_vat_pct"))

    b = PriceLogic.calculate(quote)
    with c_out:
        rows = [("Labour total", fmt(b.labor_sum)), ("Material", fmt(b.materials_cost)),
                ("Travel", fmt(b.travel_sum))]
        if quote.callout_fee:
            rows.append(("Callout", fmt(quote.callout_fee)))
        if quote.discount_pct:
            rows.append((f"Discount {quote.discount_pct:g}%", f"−{fmt(b.discount_amount)}"))
        rows += [("Subtotal", fmt(b.net_amount)), (f"VAT {quote.vat_pct:g}%", fmt(b.vat_amount))]
        st.table(pd.DataFrame(rows, columns=["", "Amount"]).set_index(""))
        st.metric("Total", fmt(b.grand_total))

        text = PriceLogic.breakdown_text(quote, locale=settings.money_locale)
        a1, a2, a3 = st.columns(3)
        show_copy = a1.button("Copy breakdown", use_container_width=True)
        a2.download_button(
            "Print / Excel",
            data=quote_to_excel(quote),
            file_name="price_estimate.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            use_container_width=True,
        )
        a3.button("Reset", on_click=on_reset, use_container_width=True)
        if show_copy:
            # st.code carries its own copy-to-clipboard button
            st.code(text, language=None)
            st.download_button("Download as text", data=text, file_name="price_estimate.txt")
        st.caption("Prices are indicative and do not reflect specific conditions "
                   "(heights, chasing, material, inspection, etc.).")

    footer("estimate")

def render_assistant():
    st.markdown("<h1 class='main-header'>🤖 Assistant (AI)</h1>", unsafe_allow_html=True)
    for msg in st.session_state.chat_messages:
        with st.chat_message(msg["role"]):
            st.write(msg["content"])

    prompt = st.chat_input("Write a question…")
    if prompt and prompt.strip():
        st.session_state.chat_messages.append({"role": "user", "content": prompt.strip()})
        with st.chat_message("user"):
            st.write(prompt.strip())
        with st.chat_message("assistant"):
            with st.spinner("…writing an answer"):
                reply = ask_assistant(st.session_state.chat_messages, settings.chat_api_base,
                                      timeout_s=settings.chat.timeout_s)
            st.write(reply)
        st.session_state.chat_messages.append({"role": "assistant", "content": reply})

# --- Sidebar ---
with st.sidebar:
    st.title(BRAND)
    page = st.radio("Navigation", PAGES, label_visibility="collapsed")
    st.markdown("---")
    st.caption("Pricing in EUR, VAT applied after discount.")

# --- Main Area ---
if page == "Home":
    render_home()
elif page == "Voltage drop calculator":
    render_voltage_drop()
elif page == "Price estimate":
    render_price_estimate()
else:
    render_assistant()
