import calendar
from datetime import date

import pandas as pd
import streamlit as st

from nz_holidays.calendar_grid import WEEKDAY_LABELS, grid_weeks, month_grid, shift_month
from nz_holidays.holidays_nz import year_holidays
from nz_holidays.models import REGION_NAMES, HolidayType, RegionId
from nz_holidays.region_highlight import (
    focused_regions,
    highlighted_regions,
    region_states,
    suggestion_region_name,
)
from nz_holidays.run import enrich_row
from nz_holidays.service import lookup_region_holidays
from nz_holidays.suggestions_gemini import get_holiday_activities

st.set_page_config(page_title="NZ Holiday Planner", page_icon="🇳🇿", layout="wide")

st.title("🇳🇿 NZ Holiday Planner")
st.caption(
    "Public, regional anniversary and school holidays for any year. "
    "Pick a holiday to see which regions observe it and get activity ideas."
)

TYPE_BADGE = {
    HolidayType.PUBLIC: "🟢",
    HolidayType.SCHOOL: "🟠",
    HolidayType.REGIONAL: "🟣",
}
YEARS = list(range(2020, 2031))


@st.cache_data
def _holidays_for(year: int):
    return year_holidays(year)


today = date.today()
st.session_state.setdefault("view_year", today.year)
st.session_state.setdefault("view_month", today.month)
st.session_state.setdefault("selected_holiday", None)
st.session_state.setdefault("ai_suggestion", None)


def _move(delta: int) -> None:
    y, m = shift_month(st.session_state.view_year, st.session_state.view_month, delta)
    st.session_state.view_year, st.session_state.view_month = y, m


def _select(holiday) -> None:
    st.session_state.selected_holiday = holiday
    st.session_state.ai_suggestion = None


# ----------------------------
# Month navigation
# ----------------------------
nav_prev, nav_month, nav_year, nav_next = st.columns([1, 3, 2, 1])
with nav_prev:
    st.button("◀", on_click=_move, args=(-1,), use_container_width=True)
with nav_month:
    st.session_state.view_month = st.selectbox(
        "Month",
        options=list(range(1, 13)),
        index=st.session_state.view_month - 1,
        format_func=lambda m: calendar.month_name[m],
    )
with nav_year:
    year_options = sorted(set(YEARS) | {st.session_state.view_year})
    st.session_state.view_year = st.selectbox(
        "Year",
        options=year_options,
        index=year_options.index(st.session_state.view_year),
    )
with nav_next:
    st.button("▶", on_click=_move, args=(1,), use_container_width=True)

view_year = st.session_state.view_year
view_month = st.session_state.view_month
holidays = _holidays_for(view_year)

st.markdown("🟢 Public &nbsp;&nbsp; 🟠 School &nbsp;&nbsp; 🟣 Regional")

col_cal, col_side = st.columns([7, 5])

# ----------------------------
# Calendar grid
# ----------------------------
with col_cal:
    header = st.columns(7)
    for col, label in zip(header, WEEKDAY_LABELS):
        col.markdown(f"**{label}**")

    for week in grid_weeks(month_grid(view_year, view_month, holidays)):
        cols = st.columns(7)
        for col, day in zip(cols, week):
            with col:
                if day.is_current_month:
                    marker = " 📍" if day.date == today else ""
                    st.markdown(f"**{day.date.day}**{marker}")
                else:
                    st.markdown(f":gray[{day.date.day}]")
                for h in day.holidays:
                    st.button(
                        f"{TYPE_BADGE[h.type]} {h.name}",
                        key=f"h-{h.id}",
                        on_click=_select,
                        args=(h,),
                        use_container_width=True,
                    )

# ----------------------------
# Regions + selected holiday
# ----------------------------
with col_side:
    selected = st.session_state.selected_holiday
    if selected is not None and selected.date.year != view_year:
        selected = None

    st.subheader("Regional impact")
    st.caption(f"Regions with a holiday in {calendar.month_name[view_month]} {view_year}")

    states = region_states(
        highlighted_regions(holidays, view_year, view_month),
        focused_regions(selected),
    )
    state_label = {
        "focused": "Selected holiday region",
        "highlighted": "Has holiday this month",
        "none": "No holiday",
    }
    st.dataframe(
        pd.DataFrame(
            [{"Region": REGION_NAMES[r], "Status": state_label[s]} for r, s in states.items()]
        ),
        hide_index=True,
        use_container_width=True,
    )

    if selected is not None:
        st.button("Show all", on_click=_select, args=(None,))
        st.divider()
        st.markdown(f"{TYPE_BADGE[selected.type]} **{selected.type.value.title()} holiday**")
        st.subheader(selected.name)
        st.write(selected.date.strftime("%A, %d %B %Y"))

        st.markdown("**AI Activity Planner**")
        if st.session_state.ai_suggestion is None:
            if st.button("Get ideas", type="primary"):
                with st.spinner("Planning…"):
                    st.session_state.ai_suggestion = get_holiday_activities(
                        selected.name, suggestion_region_name(selected)
                    )
            else:
                st.caption(f'"What should we do this {selected.name}?"')
        if st.session_state.ai_suggestion is not None:
            st.markdown(st.session_state.ai_suggestion, unsafe_allow_html=True)


st.divider()
st.header("📍 Holidays for a region")

region_choice = st.selectbox(
    "Region",
    options=[None] + list(RegionId),
    format_func=lambda r: "Nationwide only" if r is None else REGION_NAMES[r],
)
include_school = st.toggle("Include school holidays", value=False)

if st.button("Lookup", type="primary"):
    result = lookup_region_holidays(region_choice, view_year, include_school=include_school)
    if result["manual_review"]:
        st.warning(result["audit_message"])
    else:
        st.success(result["audit_message"])
    st.metric("Holidays", result["holiday_count"])
    st.dataframe(pd.DataFrame(result["holidays"]), use_container_width=True)


st.divider()
st.header("📦 Batch payroll check (CSV)")

template_csv = """employee_id,region,year,start_date,end_date
E001,Wellington,2025,2025-01-13,2025-01-26
E002,hawkes_bay,2025,2025-10-20,2025-11-02
E003,Chatham Islands,2025,,
"""

st.download_button(
    "⬇️ Download batch CSV template",
    data=template_csv,
    file_name="batch_template.csv",
    mime="text/csv",
)

st.caption("Upload a CSV with one row per employee and the region they work in.")

uploaded = st.file_uploader("Upload CSV", type=["csv"])

default_year = st.selectbox("Default year (used if missing in CSV)", YEARS, index=YEARS.index(2025))
default_start = st.date_input("Default pay period start (optional)", value=None)
default_end = st.date_input("Default pay period end (optional)", value=None)

if uploaded:
    df = pd.read_csv(uploaded, dtype=str, keep_default_na=False)

    if "region" not in df.columns:
        st.error("CSV must include a 'region' column.")
        st.stop()

    results = []
    with st.spinner("Processing rows…"):
        for idx, row in enumerate(df.to_dict(orient="records")):
            try:
                results.append(
                    enrich_row(
                        idx,
                        row,
                        year=int(default_year),
                        period_start=default_start,
                        period_end=default_end,
                    )
                )
            except Exception as e:
                results.append({"row": idx, "employee_id": row.get("employee_id"), "error": str(e)})

    out_df = pd.DataFrame(results)
    st.dataframe(out_df, use_container_width=True)

    st.download_button(
        "⬇️ Download results CSV",
        data=out_df.to_csv(index=False),
        file_name="payroll_holiday_check_results.csv",
        mime="text/csv",
    )
