from contextlib import closing
from datetime import date
from pathlib import Path

import streamlit as st

from fitness_tracker.accounts import authenticate, register_user, update_goal
from fitness_tracker.activity_db import (
    add_activity,
    connect_db,
    delete_activity,
    get_user,
    init_db,
    list_activities,
    list_activities_for_day,
    update_activity,
)
from fitness_tracker.calories import calculate_calories
from fitness_tracker.config import configure_logging, load_settings
from fitness_tracker.errors import FitnessTrackerError
from fitness_tracker.models import ActivityType, metric_labels
from fitness_tracker.progress import summarize_day
from fitness_tracker.validation import validate_metrics

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Fitness Tracker", page_icon="🏃", layout="wide")
st.title("🏃 Fitness Tracker")

db_path = settings.db_path
with closing(connect_db(db_path)) as conn:
    init_db(conn)

st.sidebar.markdown("### Database")
st.sidebar.code(f"DB: {Path(db_path).resolve()}")


def activity_form(key: str, default_type: ActivityType = ActivityType.WALKING, defaults=(1.0, 1.0, 1.0)):
    kind = st.selectbox(
        "Activity Type",
        list(ActivityType),
        index=list(ActivityType).index(default_type),
        format_func=lambda t: t.label,
        key=f"{key}_type",
    )
    label1, label2, label3 = metric_labels(kind)
    cols = st.columns(3)
    m1 = cols[0].number_input(label1, min_value=0.1, value=float(defaults[0]), step=0.1, key=f"{key}_m1")
    m2 = cols[1].number_input(label2, min_value=0.1, value=float(defaults[1]), step=0.1, key=f"{key}_m2")
    m3 = cols[2].number_input(label3, min_value=0.1, value=float(defaults[2]), step=0.1, key=f"{key}_m3")
    return kind, float(m1), float(m2), float(m3)


user_id = st.session_state.get("user_id")

if user_id is None:
    login_tab, register_tab = st.tabs(["Login", "Register"])
    with login_tab:
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password", key="login_password")
        if st.button("Log in"):
            with closing(connect_db(db_path)) as conn:
                try:
                    user = authenticate(conn, username, password)
                except FitnessTrackerError as exc:
                    st.error(exc.message)
                else:
                    st.session_state["user_id"] = user.id
                    st.session_state["username"] = user.username
                    st.rerun()
    with register_tab:
        new_username = st.text_input("Username", key="reg_username")
        new_password = st.text_input("Password (exactly 12 characters)", type="password", key="reg_password")
        confirm = st.text_input("Confirm Password", type="password", key="reg_confirm")
        goal = st.number_input("Daily Calorie Goal", min_value=1, max_value=10000, value=300, step=10)
        if st.button("Register"):
            with closing(connect_db(db_path)) as conn:
                try:
                    user = register_user(
                        conn,
                        username=new_username,
                        password=new_password,
                        confirm_password=confirm,
                        calorie_goal=int(goal),
                    )
                except FitnessTrackerError as exc:
                    st.error(exc.message)
                else:
                    st.session_state["user_id"] = user.id
                    st.session_state["username"] = user.username
                    st.success("Registration successful! Welcome to Fitness Tracker.")
                    st.rerun()
    st.stop()

st.sidebar.write(f"Logged in as **{st.session_state['username']}**")
if st.sidebar.button("Log out"):
    st.session_state.clear()
    st.rerun()

page = st.sidebar.radio("Page", ["Dashboard", "Log Activity", "Activities", "Goals"])

if page == "Dashboard":
    today = date.today()
    with closing(connect_db(db_path)) as conn:
        user = get_user(conn, user_id)
        summary = summarize_day(list_activities_for_day(conn, user_id, today), user.calorie_goal, today)
    st.header(f"Today ({today.isoformat()})")
    cols = st.columns(3)
    cols[0].metric("Calories burned", f"{summary.total_calories:.1f} kcal")
    cols[1].metric("Goal", f"{summary.calorie_goal} kcal")
    cols[2].metric("Remaining", f"{summary.remaining_calories:.1f} kcal")
    st.progress(summary.progress_percentage / 100.0, text=f"{summary.progress_percentage:.0f}%")
    if summary.is_goal_achieved:
        st.success("Goal achieved!")
    if summary.activities:
        st.dataframe(
            [
                {
                    "activity": kind.label,
                    "count": summary.count_by_activity[kind],
                    "calories": round(total, 2),
                }
                for kind, total in summary.calories_by_activity.items()
            ],
            use_container_width=True,
        )
    else:
        st.info("No activities recorded today.")

if page == "Log Activity":
    st.header("Log Activity")
    kind, m1, m2, m3 = activity_form("new")
    try:
        validate_metrics(kind, m1, m2, m3)
        st.caption(f"Estimated: {calculate_calories(kind, m1, m2, m3):.1f} kcal")
    except FitnessTrackerError as exc:
        st.warning(exc.message)
    if st.button("Save"):
        with closing(connect_db(db_path)) as conn:
            try:
                validate_metrics(kind, m1, m2, m3)
                record = add_activity(conn, user_id=user_id, activity_type=kind, metric1=m1, metric2=m2, metric3=m3)
            except FitnessTrackerError as exc:
                st.error(exc.message)
            else:
                st.success(f"Activity recorded! You burned {record.calories_burned:.1f} calories.")

if page == "Activities":
    st.header("Activities")
    with closing(connect_db(db_path)) as conn:
        records = list_activities(conn, user_id)
    if not records:
        st.info("No activities yet.")
    for record in records:
        label1, label2, label3 = record.labels
        with st.expander(
            f"{record.recorded_at:%Y-%m-%d %H:%M} | {record.activity_type.label} | {record.calories_burned:.2f} kcal"
        ):
            st.write(f"{label1}: {record.metric1} | {label2}: {record.metric2} | {label3}: {record.metric3}")
            kind, m1, m2, m3 = activity_form(
                f"edit_{record.id}",
                default_type=record.activity_type,
                defaults=(record.metric1, record.metric2, record.metric3),
            )
            c1, c2 = st.columns(2)
            if c1.button("Update", key=f"update_{record.id}"):
                with closing(connect_db(db_path)) as conn:
                    try:
                        validate_metrics(kind, m1, m2, m3)
                        update_activity(
                            conn, record.id, user_id=user_id, activity_type=kind, metric1=m1, metric2=m2, metric3=m3
                        )
                    except FitnessTrackerError as exc:
                        st.error(exc.message)
                    else:
                        st.success("Activity updated successfully!")
                        st.rerun()
            if c2.button("Delete", key=f"delete_{record.id}"):
                with closing(connect_db(db_path)) as conn:
                    try:
                        delete_activity(conn, record.id, user_id=user_id)
                    except FitnessTrackerError as exc:
                        st.error(exc.message)
                    else:
                        st.rerun()

if page == "Goals":
    st.header("Daily Calorie Goal")
    today = date.today()
    with closing(connect_db(db_path)) as conn:
        user = get_user(conn, user_id)
        summary = summarize_day(list_activities_for_day(conn, user_id, today), user.calorie_goal, today)
    st.write(f"Current progress: {summary.total_calories:.1f} / {summary.calorie_goal} kcal")
    new_goal = st.number_input("Daily Calorie Goal", min_value=1, max_value=10000, value=max(1, user.calorie_goal), step=10)
    if st.button("Update goal"):
        with closing(connect_db(db_path)) as conn:
            try:
                update_goal(conn, user_id, int(new_goal))
            except FitnessTrackerError as exc:
                st.error(exc.message)
            else:
                st.success("Goal updated successfully!")
