import streamlit as st
import requests
import pandas as pd
from datetime import datetime

from dispatcher.config import API_BASE_URL

# ---- CONFIG ----
st.set_page_config(
    page_title="Food Delivery Dispatch",
    page_icon="🚚",
    layout="wide",
    initial_sidebar_state="expanded"
)

# ---- CUSTOM CSS ----
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #666;
        margin-bottom: 2rem;
    }
</style>
""", unsafe_allow_html=True)


# ---- HELPER FUNCTIONS ----
def check_api_health():
    """Check if API is running"""
    try:
        response = requests.get(f"{API_BASE_URL}/", timeout=2)
        return response.json() if response.status_code == 200 else None
    except requests.RequestException:
        return None


def call_api(method, endpoint, **kwargs):
    """Call the dispatch API, returning (body, status)"""
    try:
        response = requests.request(method, f"{API_BASE_URL}{endpoint}", timeout=5, **kwargs)
        return response.json(), response.status_code
    except requests.RequestException as e:
        return {"detail": {"detail": str(e)}}, 500


def error_message(result):
    """Extract the message from an error body"""
    detail = result.get("detail", {})
    if isinstance(detail, dict):
        return detail.get("detail", "Unknown error")
    return str(detail)


def format_time(value):
    """HH:MM:SS for an ISO timestamp"""
    if not value:
        return "-"
    return datetime.fromisoformat(value).strftime("%H:%M:%S")


# ---- MAIN APP ----
st.markdown('<div class="main-header">🚚 Food Delivery Dispatch</div>', unsafe_allow_html=True)
st.markdown('<div class="sub-header">Place orders, dispatch drivers and track deliveries</div>', unsafe_allow_html=True)

health = check_api_health()
if not health:
    st.error(f"⚠️ Cannot connect to API. Please ensure the FastAPI backend is running on {API_BASE_URL}")
    st.code("python -m backend.main", language="bash")
    st.stop()

# ============ SIDEBAR ============
st.sidebar.title("📋 Control Panel")
st.sidebar.markdown("### 📊 Status")
status_col1, status_col2 = st.sidebar.columns(2)
with status_col1:
    st.metric("Drivers", health.get("drivers", 0))
with status_col2:
    st.metric("Pending", health.get("pending_orders", 0))

# ============ TABS ============
tab1, tab2, tab3, tab4 = st.tabs(["🛒 Place Order", "🎯 Dispatch", "📍 Track & Complete", "📊 Summary"])

# ============ TAB 1: PLACE ORDER ============
with tab1:
    st.header("Place New Order")

    with st.form("place_order", clear_on_submit=True):
        address = st.text_input("Customer address")
        items_text = st.text_area("Items (one per line)")
        submitted = st.form_submit_button("Place Order", type="primary")

    if submitted:
        items = [line.strip() for line in items_text.splitlines() if line.strip()]
        result, status = call_api("POST", "/orders", json={"delivery_address": address, "items": items})
        if status == 201:
            st.success(f"✅ Order {result['order_id']} placed at {format_time(result['created_at'])}")
        else:
            st.error(f"❌ Failed to place order: {error_message(result)}")

# ============ TAB 2: DISPATCH ============
with tab2:
    st.header("Assign Driver to Next Order")

    queue, _ = call_api("GET", "/queue")
    st.caption(f"{queue.get('count', 0)} orders waiting")

    if queue.get("orders"):
        queue_df = pd.DataFrame(queue["orders"])
        queue_df["created_at"] = queue_df["created_at"].apply(format_time)
        st.dataframe(
            queue_df[["order_id", "delivery_address", "item_count", "created_at"]],
            hide_index=True,
            use_container_width=True
        )
    else:
        st.info("ℹ️ Queue is empty.")

    if st.button("🎯 Assign Driver", type="primary", use_container_width=True):
        result, status = call_api("POST", "/assignments")
        if status == 200:
            driver = result["driver"]
            st.success(
                f"✅ Order {result['order']['order_id']} assigned to {driver['name']} "
                f"({driver['driver_id']}), delivery by {format_time(result['delivery_time'])}"
            )
        else:
            st.error(f"❌ {error_message(result)}")

# ============ TAB 3: TRACK & COMPLETE ============
with tab3:
    st.header("Track or Complete an Order")

    order_id = st.text_input("Order ID", placeholder="ORD1").strip()
    col1, col2 = st.columns(2)

    with col1:
        if st.button("📍 Track", use_container_width=True) and order_id:
            result, status = call_api("GET", f"/orders/{order_id}")
            if status == 200:
                st.markdown(f"**Status:** {result['status']}")
                st.markdown(f"**Address:** {result['delivery_address']}")
                st.markdown(f"**Items:** {', '.join(result['items']) or 'none'}")
                st.markdown(f"**Placed:** {format_time(result['created_at'])}")
                driver = result.get("driver")
                if driver:
                    st.markdown(f"**Driver:** {driver['name']} ({driver['driver_id']})")
                    st.markdown(f"**Next available:** {format_time(driver['next_available_at'])}")
            else:
                st.error(f"❌ {error_message(result)}")

    with col2:
        if st.button("✅ Complete Delivery", use_container_width=True) and order_id:
            result, status = call_api("POST", f"/orders/{order_id}/complete")
            if status == 200 and result.get("already_completed"):
                st.info(f"ℹ️ {result['message']}")
            elif status == 200:
                st.success(f"✅ {result['message']} at {format_time(result['order']['completed_at'])}")
            else:
                st.error(f"❌ {error_message(result)}")

# ============ TAB 4: SUMMARY ============
with tab4:
    st.header("Order Summary")

    summary, status = call_api("GET", "/summary")
    if status != 200:
        st.error("Failed to load summary")
        st.stop()

    totals = summary.get("totals", {})
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Pending", totals.get("pending", 0))
    with col2:
        st.metric("Active", totals.get("active", 0))
    with col3:
        st.metric("Completed", totals.get("completed", 0))

    st.markdown("---")

    st.subheader("🚚 Active Orders")
    active = summary["active"]["orders"]
    if active:
        st.dataframe(pd.DataFrame(active), hide_index=True, use_container_width=True)
    else:
        st.info("No active orders.")

    st.subheader("✅ Recently Completed")
    completed = summary["completed"]
    if completed["recent"]:
        completed_df = pd.DataFrame(completed["recent"])
        completed_df["completed_at"] = completed_df["completed_at"].apply(format_time)
        st.dataframe(completed_df, hide_index=True, use_container_width=True)
        if completed["remaining"] > 0:
            st.caption(f"... and {completed['remaining']} more.")
    else:
        st.info("No completed orders.")

    st.subheader("👨‍🍳 Driver Status")
    if summary["drivers"]:
        drivers_df = pd.DataFrame(summary["drivers"])
        drivers_df["status"] = drivers_df.apply(
            lambda row: "Available" if row["available"] else f"Busy until {format_time(row['busy_until'])}",
            axis=1
        )
        st.dataframe(drivers_df[["driver_id", "name", "status"]], hide_index=True, use_container_width=True)
    else:
        st.info("No drivers on the roster.")

# ---- FOOTER ----
st.markdown("---")
st.caption(f"Last refreshed {datetime.now().strftime('%H:%M:%S')}")
