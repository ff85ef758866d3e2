"""
Cellarbook - your cellar, your tastings, your friends' cellars.
A Streamlit app over Supabase. Behaviour lives in the `cellarbook` package;
this file only lays out pages and wires widgets to it.
"""

import sys
from dataclasses import replace
from pathlib import Path

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from cellarbook import composition as grapes
from cellarbook import cellar_repo, location, ratings_repo, wines_repo
from cellarbook.admin import AdminEntity, MasterDataAdmin
from cellarbook.auth import setup_authentication
from cellarbook.constants import Sweetness, TastingFields, WineBody, WineColor, WineType
from cellarbook.error_handling import CellarError, backend_call
from cellarbook.forms import CellarEntryForm, RatingForm, WineForm
from cellarbook.images import upload_wine_image
from cellarbook.ledger import CellarLedger, ConsumptionPrompt
from cellarbook.location import RATING_DIALOG, WINE_DIALOG, LocationConfig, LocationSelection
from cellarbook.master_data import MasterDataCache
from cellarbook.notifications import StreamlitNotifier
from cellarbook.rating_table import (
    COLUMN_LABELS,
    FILTER_FIELDS,
    RatingQuery,
    RatingRow,
    SortKey,
    distinct_values,
    load_visibility,
    project,
    save_visibility,
    to_frame,
)
from cellarbook.schema import CellarItem, ConsumptionRecord
from cellarbook.social import SocialService
from cellarbook.stats import compute_stats
from cellarbook.supabase_session import current_user_email, current_user_id, get_supabase_client, sign_out
from cellarbook.workflows import CellarWorkflows, run_action, run_decrement

st.set_page_config(
    page_title="Cellarbook",
    page_icon="🍷",
    layout="wide",
)

# AUTHENTICATION - stops the script run until logged in
username = setup_authentication()

sb = get_supabase_client()
user_id = current_user_id(sb)
notifier = StreamlitNotifier()
flows = CellarWorkflows(sb, user_id)
ledger = CellarLedger(sb, user_id)
social = SocialService(sb, user_id)

WINE_TYPES = [t.value for t in WineType]


# =======================
# SHARED WIDGETS
# =======================

def open_master_data(key: str) -> MasterDataCache:
    """Master data lives as long as the dialog that loaded it."""
    cache_key = f"{key}_master_data"
    if cache_key not in st.session_state:
        st.session_state[cache_key] = MasterDataCache.load(sb)
    cache = st.session_state[cache_key]
    if not cache.loaded:
        st.error(cache.load_error)
    return cache


def close_dialog(key: str) -> None:
    for suffix in ("master_data", "location", "composition", "producer_page", "wine"):
        st.session_state.pop(f"{key}_{suffix}", None)


def _pick(label, options, current, key, format_func=lambda o: o.name):
    """Selectbox over master data rows with a leading blank choice."""
    ids = [None] + [o.id for o in options]
    names = {o.id: format_func(o) for o in options}
    index = ids.index(current) if current in ids else 0
    return st.selectbox(label, ids, index=index, key=key,
                        format_func=lambda i: "-" if i is None else names[i])


def location_picker(key: str, cache: MasterDataCache, config: LocationConfig,
                    initial: LocationSelection = LocationSelection()) -> LocationSelection:
    state_key = f"{key}_location"
    state = st.session_state.setdefault(state_key, initial)

    chosen = _pick("Country *" if config.country_required else "Country",
                   location.country_options(cache), state.country_id, f"{key}_country")
    if chosen != state.country_id:
        state = location.select_country(state, cache, chosen)

    chosen = _pick("Region", location.region_options(state, cache), state.region_id, f"{key}_region")
    if chosen != state.region_id:
        state = location.select_region(state, cache, chosen)

    if config.appellation_enabled:
        chosen = _pick("Appellation", location.appellation_options(state, cache, config),
                       state.appellation_id, f"{key}_appellation")
        if chosen != state.appellation_id:
            state = location.select_appellation(state, cache, chosen)

    if state != st.session_state[state_key]:
        st.session_state[state_key] = state
        st.rerun()
    return state


def composition_editor(key: str, cache: MasterDataCache, initial: grapes.Composition = ()) -> grapes.Composition:
    state_key = f"{key}_composition"
    state = st.session_state.setdefault(state_key, initial)

    for entry in state:
        variety = cache.grape_variety(entry.grape_variety_id)
        col1, col2, col3 = st.columns([3, 2, 1])
        col1.write(variety.name if variety else entry.grape_variety_id)
        value = col2.number_input("%", 0, 100, entry.percentage,
                                  key=f"{key}_pct_{entry.grape_variety_id}", label_visibility="collapsed")
        if value != entry.percentage:
            state = grapes.set_percentage(state, entry.grape_variety_id, int(value))
        if col3.button("✕", key=f"{key}_rm_{entry.grape_variety_id}"):
            state = grapes.remove(state, entry.grape_variety_id)

    chosen = _pick("Add grape", cache.grape_varieties, None, f"{key}_add_grape")
    if chosen:
        state = grapes.add(state, cache, chosen)
        st.session_state.pop(f"{key}_add_grape", None)

    if state:
        st.caption(f"Total: {grapes.total(state)}%")
    if state != st.session_state[state_key]:
        st.session_state[state_key] = state
        st.rerun()
    return state


def producer_picker(key: str, initial: str = "") -> str:
    """Free-text producer with paged suggestions from the producers table."""
    name = st.text_input("Producer *", value=initial, key=f"{key}_producer")
    page = st.session_state.setdefault(f"{key}_producer_page", 0)
    try:
        with backend_call("load producers"):
            matches, total = wines_repo.repo_search_producers(sb, name, page)
    except CellarError as e:
        notifier.error(str(e))
        return name
    if matches and not any(m["name"] == name for m in matches):
        picked = st.selectbox("Existing producers", [""] + [m["name"] for m in matches], key=f"{key}_producer_pick")
        if picked:
            return picked
        if (page + 1) * len(matches) < total and st.button("More producers", key=f"{key}_producer_more"):
            st.session_state[f"{key}_producer_page"] = page + 1
            st.rerun()
    return name


def wine_fields(key: str, cache: MasterDataCache, config: LocationConfig, form: WineForm = WineForm()) -> WineForm:
    name = st.text_input("Wine name *", value=form.name, key=f"{key}_name")
    producer = producer_picker(key, form.producer)
    type_index = WINE_TYPES.index(form.wine_type) if form.wine_type in WINE_TYPES else 0
    wine_type = st.selectbox("Type *", WINE_TYPES, index=type_index, key=f"{key}_type",
                             format_func=lambda t: WineType(t).label)
    vintage = st.number_input("Vintage", 1800, 2030, value=form.vintage, key=f"{key}_vintage")
    alcohol = st.number_input("Alcohol %", 0.0, 50.0, value=form.alcohol_content, key=f"{key}_abv")
    selection = location_picker(key, cache, config, form.location)
    blend = composition_editor(key, cache, form.composition) if config.appellation_enabled else ()
    return replace(form, name=name, producer=producer, wine_type=wine_type,
                   vintage=int(vintage) if vintage else None, alcohol_content=alcohol,
                   location=selection, composition=blend)


def cellar_fields(key: str, form: CellarEntryForm = CellarEntryForm()) -> CellarEntryForm:
    col1, col2 = st.columns(2)
    quantity = col1.number_input("Bottles", 1, 999, form.quantity, key=f"{key}_qty")
    price = col2.number_input("Price per bottle", 0.0, value=form.purchase_price, key=f"{key}_price")
    purchased = col1.date_input("Purchase date", value=form.purchase_date, key=f"{key}_date")
    storage = col2.text_input("Storage location", value=form.storage_location, key=f"{key}_storage")
    notes = st.text_area("Notes", value=form.notes, key=f"{key}_notes")
    return CellarEntryForm(int(quantity), purchased, price, storage, notes)


def _enum_pick(label, enum, current, key):
    values = [None] + [m.value for m in enum]
    return st.selectbox(label, values, index=values.index(current) if current in values else 0, key=key,
                        format_func=lambda v: "-" if v is None else v.replace("_", " ").title())


def rating_fields(key: str, form: RatingForm = RatingForm()) -> RatingForm:
    rating = st.slider("Rating", 50, 100, form.rating or 90, key=f"{key}_rating")
    tasted = st.date_input("Tasting date", value=form.tasting_date, key=f"{key}_tasted")
    col1, col2, col3 = st.columns(3)
    color = _enum_pick("Color", WineColor, form.color, f"{key}_color")
    body = _enum_pick("Body", WineBody, form.body, f"{key}_body")
    sweetness = _enum_pick("Sweetness", Sweetness, form.sweetness, f"{key}_sweet")
    temp_min = col1.number_input("Serve from °C", 0, 25, value=form.serving_temp_min, key=f"{key}_tmin")
    temp_max = col2.number_input("Serve to °C", 0, 25, value=form.serving_temp_max, key=f"{key}_tmax")
    pairing = col3.text_input("Food pairing", value=form.food_pairing, key=f"{key}_food")
    tasting = dict(form.tasting)
    with st.expander("Structured tasting notes"):
        for field_name in TastingFields.all():
            label = field_name.replace("_", " ").capitalize()
            tasting[field_name] = st.text_input(label, value=tasting.get(field_name, ""), key=f"{key}_{field_name}")
    notes = st.text_area("Tasting notes", value=form.tasting_notes, key=f"{key}_notes")
    return RatingForm(rating, tasted, notes, pairing, color, body, sweetness, temp_min, temp_max, tasting)


# =======================
# CELLAR
# =======================

def type_share_chart(stats):
    fig = go.Figure()
    fig.add_trace(go.Pie(
        labels=[WineType(s.wine_type).label if s.wine_type in WINE_TYPES else s.wine_type for s in stats.by_type],
        values=[s.count for s in stats.by_type],
        hole=0.5,
        marker=dict(colors=['#800020', '#F3E5AB', '#F4A6B7', '#A7C7E7', '#B39DDB', '#E69F00']),
    ))
    fig.update_layout(showlegend=True, height=260, margin=dict(l=10, r=10, t=10, b=10))
    return fig


def consume_form(prompt: ConsumptionPrompt):
    item = prompt.item
    with st.form(f"consume_{item.id}"):
        st.write(f"How many bottles of **{item.wine.name if item.wine else item.wine_id}** did you drink?")
        quantity = st.number_input("Bottles", 1, prompt.max_quantity, 1)
        notes = st.text_area("Notes")
        if st.form_submit_button("Confirm"):
            if run_action(notifier, lambda: ledger.consume(item, int(quantity), notes) or True, "Consumption recorded"):
                st.session_state.pop("consume_prompt", None)
                st.rerun()
    if st.button("Cancel", key=f"consume_cancel_{item.id}"):
        st.session_state.pop("consume_prompt", None)
        st.rerun()


def cellar_page():
    try:
        with backend_call("load your cellar"):
            items = [CellarItem.from_record(r) for r in cellar_repo.repo_list_cellar(sb, user_id)]
    except CellarError as e:
        notifier.error(str(e))
        items = []

    stats = compute_stats(items)
    col1, col2, col3 = st.columns(3)
    col1.metric("Bottles", stats.total_bottles)
    col2.metric("Value", f"{stats.total_value:,.2f}")
    col3.metric("Litres", f"{stats.total_liters:.2f}")
    if stats.by_type:
        st.plotly_chart(type_share_chart(stats), key="type_share")

    with st.expander("➕ Add wine to cellar"):
        cache = open_master_data("add_wine")
        wine = wine_fields("add_wine", cache, WINE_DIALOG)
        entry = cellar_fields("add_wine")
        upload = st.file_uploader("Label photo", type=["png", "jpg", "jpeg", "webp"], key="add_wine_image")
        if st.button("Add to cellar", type="primary"):
            def submit():
                image_url = upload_wine_image(sb, upload.name, upload.getvalue(), upload.type) if upload else None
                return flows.add_wine_to_cellar(replace(wine, image_url=image_url), entry)
            if run_action(notifier, submit, "Wine added to your cellar!") is not None:
                close_dialog("add_wine")
                st.rerun()

    prompt = st.session_state.get("consume_prompt")
    if prompt is not None:
        consume_form(prompt)

    for item in items:
        wine = item.wine
        if wine is None:
            continue
        with st.container(border=True):
            col1, col2, col3, col4 = st.columns([5, 1, 1, 1])
            col1.markdown(f"**{wine.name}** {wine.vintage or ''} · {wine.producer}  \n"
                          f"{wine.region or ''} {wine.country or ''}")
            col2.write(f"× {item.quantity}")
            if col3.button("＋", key=f"inc_{item.id}"):
                run_action(notifier, lambda: ledger.increment(item), "Quantity updated")
                st.rerun()
            if col4.button("－", key=f"dec_{item.id}"):
                prompt = run_decrement(notifier, ledger, item)
                if prompt is not None:
                    st.session_state["consume_prompt"] = prompt
                st.rerun()
            if st.session_state.get("editing_item") == item.id:
                edit_cellar_item(item)
            elif st.button("Edit", key=f"edit_open_{item.id}"):
                st.session_state["editing_item"] = item.id
                st.rerun()


def stop_editing(key: str) -> None:
    close_dialog(key)
    st.session_state.pop("editing_item", None)


def edit_cellar_item(item: CellarItem):
    key = f"edit_{item.id}"
    cache = open_master_data(key)
    try:
        wine, variety_ids = flows.load_wine_for_edit(item.wine_id, st.session_state, f"{key}_wine")
    except CellarError as e:
        notifier.error(str(e))
        return
    initial = WineForm.from_wine(
        wine,
        LocationSelection.from_ids(cache, wine.get("country_id"), wine.get("region_id"), wine.get("appellation_id")),
        grapes.from_variety_ids(variety_ids, cache),
    )
    form = wine_fields(key, cache, WINE_DIALOG, initial)
    entry = cellar_fields(key, CellarEntryForm.from_item(item))
    col1, col2, col3 = st.columns(3)
    if col1.button("Save", key=f"{key}_save"):
        if not run_action(notifier, lambda: flows.edit_cellar_wine(item, form, entry) or True, "Wine updated successfully!"):
            return
        stop_editing(key)
        st.rerun()
    if col2.button("Rate this wine", key=f"{key}_rate"):
        st.session_state["rate_wine_id"] = item.wine_id
    if col3.button("Close", key=f"{key}_close"):
        stop_editing(key)
        st.rerun()


# =======================
# CONSUMED
# =======================

def consumed_page():
    try:
        with backend_call("load consumed wines"):
            records = [ConsumptionRecord.from_record(r) for r in cellar_repo.repo_list_consumptions(sb, user_id)]
    except CellarError as e:
        notifier.error(str(e))
        return

    for record in records:
        with st.container(border=True):
            col1, col2, col3 = st.columns([6, 1, 1])
            when = record.consumed_at.date().isoformat() if record.consumed_at else ""
            col1.markdown(f"**{record.wine.name if record.wine else record.wine_id}** × {record.quantity} · {when}  \n"
                          f"{record.notes or ''}")
            if col2.button("↩︎ Cellar", key=f"restock_{record.id}"):
                run_action(notifier, lambda: ledger.restock(record.wine_id), "Wine added back to cellar")
                st.rerun()
            if col3.button("🗑", key=f"del_consumption_{record.id}"):
                run_action(notifier, lambda: ledger.delete_consumption(record.id), "Consumption deleted")
                st.rerun()


# =======================
# RATINGS
# =======================

def rating_table(rows, table_key: str):
    visibility = load_visibility(st.session_state, table_key)
    search = st.text_input("Search", key=f"{table_key}_search")
    cols = st.columns(len(FILTER_FIELDS))
    filters = {}
    for col, field_name in zip(cols, FILTER_FIELDS):
        filters[field_name] = col.selectbox(field_name.title(), [""] + distinct_values(rows, field_name),
                                            key=f"{table_key}_filter_{field_name}")
    col1, col2, col3 = st.columns([2, 1, 1])
    sort_key = col1.selectbox("Sort by", list(SortKey), format_func=lambda k: k.value.replace("_", " ").title(),
                              index=list(SortKey).index(SortKey.TASTED_DATE), key=f"{table_key}_sort")
    descending = col2.toggle("Descending", value=True, key=f"{table_key}_desc")
    with col3.popover("Columns"):
        for column, label in COLUMN_LABELS.items():
            shown = st.checkbox(label, value=visibility.is_visible(column), key=f"{table_key}_col_{column}")
            if shown != visibility.is_visible(column):
                visibility = visibility.toggle(column)
        if st.button("Reset", key=f"{table_key}_cols_reset"):
            visibility = visibility.reset()
    save_visibility(st.session_state, table_key, visibility)

    shown_rows = project(rows, RatingQuery(search, filters, sort_key, descending))
    st.dataframe(to_frame(shown_rows, visibility), hide_index=True)
    return shown_rows


def ratings_page():
    try:
        with backend_call("load your ratings"):
            records = ratings_repo.repo_list_ratings(sb, user_id)
    except CellarError as e:
        notifier.error(str(e))
        records = []

    rows = rating_table([RatingRow.from_record(r) for r in records], "ratings")

    rate_wine_id = st.session_state.get("rate_wine_id")
    with st.expander("⭐ Rate a wine", expanded=bool(rate_wine_id)):
        source = st.radio("Wine", ["From my cellar", "New wine"], horizontal=True, key="rate_source")
        if source == "From my cellar":
            try:
                with backend_call("load your wines"):
                    cellar = [CellarItem.from_record(r) for r in cellar_repo.repo_list_cellar(sb, user_id)]
            except CellarError as e:
                notifier.error(str(e))
                cellar = []
            wine_ids = [i.wine_id for i in cellar]
            names = {i.wine_id: f"{i.wine.name} {i.wine.vintage or ''}" for i in cellar if i.wine}
            index = wine_ids.index(rate_wine_id) if rate_wine_id in wine_ids else 0
            wine_id = st.selectbox("Cellar wine", wine_ids, index=index, format_func=lambda w: names.get(w, w))
            form = rating_fields("rate_cellar")
            if st.button("Save rating", type="primary") and wine_id:
                if run_action(notifier, lambda: flows.rate_cellar_wine(wine_id, form), "Rating added successfully!"):
                    st.session_state.pop("rate_wine_id", None)
                    st.rerun()
        else:
            cache = open_master_data("rate_new")
            wine = wine_fields("rate_new", cache, RATING_DIALOG)
            form = rating_fields("rate_new")
            if st.button("Save wine and rating", type="primary"):
                if run_action(notifier, lambda: flows.rate_new_wine(wine, form), "Wine and rating added successfully!"):
                    close_dialog("rate_new")
                    st.rerun()

    by_id = {r["id"]: r for r in records}
    if rows:
        with st.expander("✏️ Edit a rating"):
            rating_id = st.selectbox("Rating", [r.id for r in rows],
                                     format_func=lambda i: f"{by_id[i]['wine_database']['name']} · {by_id[i]['rating']}"
                                     if by_id[i].get("wine_database") else i)
            form = rating_fields(f"edit_rating_{rating_id}", RatingForm.from_rating(by_id[rating_id]))
            col1, col2 = st.columns(2)
            if col1.button("Update rating"):
                run_action(notifier, lambda: flows.edit_rating(rating_id, form), "Rating updated")
                st.rerun()
            if col2.button("Delete rating"):
                run_action(notifier, lambda: flows.delete_rating(rating_id), "Rating deleted")
                st.rerun()


# =======================
# FRIENDS & PROFILE
# =======================

def friends_page():
    try:
        lists = social.load_friendships()
    except CellarError as e:
        notifier.error(str(e))
        return

    term = st.text_input("Find people", placeholder="username or name")
    try:
        found = social.search_users(term)
    except CellarError as e:
        notifier.error(str(e))
        found = []
    for profile in found:
        col1, col2 = st.columns([4, 1])
        col1.write(f"**{profile.display_name or profile.username}** @{profile.username}")
        if col2.button("Add friend", key=f"add_{profile.user_id}"):
            run_action(notifier, lambda: social.send_friend_request(profile.user_id), "Friend request sent")
            st.rerun()

    if lists.incoming:
        st.subheader("Requests")
        for request in lists.incoming:
            col1, col2, col3 = st.columns([4, 1, 1])
            col1.write(request.profile.display_name or request.profile.username)
            if col2.button("Accept", key=f"accept_{request.id}"):
                run_action(notifier, lambda: social.respond(request.id, True), "Friend request accepted")
                st.rerun()
            if col3.button("Decline", key=f"decline_{request.id}"):
                run_action(notifier, lambda: social.respond(request.id, False), "Friend request declined")
                st.rerun()

    for request in lists.outgoing:
        st.caption(f"Waiting for {request.profile.display_name or request.profile.username}")

    st.subheader("Friends")
    for friendship in lists.friends:
        friend = friendship.profile
        with st.expander(friend.display_name or friend.username):
            try:
                cellar = social.friend_cellar(friend.user_id, lists)
            except CellarError as e:
                st.error(str(e))
                continue
            st.dataframe(pd.DataFrame([
                {"Wine": i.wine.name if i.wine else "", "Vintage": i.wine.vintage if i.wine else None,
                 "Producer": i.wine.producer if i.wine else "", "Bottles": i.quantity}
                for i in cellar
            ]), hide_index=True)
            if st.button("Remove friend", key=f"unfriend_{friendship.id}"):
                run_action(notifier, lambda: social.remove_friend(friendship.id), "Friend removed")
                st.rerun()

    st.subheader("Friends' latest ratings")
    try:
        with backend_call("load friends' ratings"):
            records = ratings_repo.repo_list_friend_ratings(sb, user_id)
    except CellarError as e:
        notifier.error(str(e))
        records = []
    rating_table([RatingRow.from_record(r) for r in records], "friend_ratings")


def profile_page():
    try:
        profile = social.load_profile()
    except CellarError as e:
        notifier.error(str(e))
        return
    with st.form("profile"):
        username_value = st.text_input("Username", value=profile.username)
        display_name = st.text_input("Display name", value=profile.display_name or "")
        bio = st.text_area("Bio", value=profile.bio or "")
        where = st.text_input("Location", value=profile.location or "")
        birth_year = st.number_input("Birth year", 1900, 2010, value=profile.birth_year)
        if st.form_submit_button("Save profile"):
            run_action(notifier, lambda: social.save_profile(
                username_value, display_name, bio, where, profile.avatar_url,
                int(birth_year) if birth_year else None, current_user_email(sb),
            ), "Profile updated")


# =======================
# ADMIN
# =======================

ADMIN_FIELDS = {
    AdminEntity.COUNTRIES: ["name", "code"],
    AdminEntity.REGIONS: ["name", "country_id"],
    AdminEntity.APPELLATIONS: ["name", "region_id"],
    AdminEntity.GRAPES: ["name", "type"],
    AdminEntity.WINES: ["name", "vintage", "wine_type"],
}


def admin_page(roles):
    admin = MasterDataAdmin(sb, roles)
    entity = st.selectbox("Table", list(AdminEntity), format_func=lambda e: e.value.title())
    col1, col2 = st.columns(2)
    sort_by = col1.selectbox("Sort by", ADMIN_FIELDS[entity], key=f"admin_sort_{entity.value}")
    descending = col2.toggle("Descending", key=f"admin_desc_{entity.value}")

    try:
        rows = admin.list(entity, sort_by, descending)
    except CellarError as e:
        notifier.error(str(e))
        return
    st.dataframe(pd.DataFrame(rows), hide_index=True)

    if entity is not AdminEntity.WINES:
        with st.form(f"admin_create_{entity.value}"):
            values = {f: st.text_input(f.replace("_", " ").title()) for f in ADMIN_FIELDS[entity]}
            if st.form_submit_button("Create"):
                values = {k: (v.strip() or None) for k, v in values.items()}
                run_action(notifier, lambda: admin.create(entity, values), "Created")

    ids = [r["id"] for r in rows]
    if ids:
        row_id = st.selectbox("Row", ids, format_func=lambda i: next(r.get("name", i) for r in rows if r["id"] == i))
        if st.button("Delete", key=f"admin_delete_{entity.value}"):
            run_action(notifier, lambda: admin.delete(entity, row_id), "Deleted")
            st.rerun()

    orphans = open_master_data("admin").find_orphans()
    if orphans["regions"] or orphans["appellations"]:
        st.warning(f"Orphaned rows: {orphans}")


# =======================
# MAIN
# =======================

def main():
    st.title("🍷 Cellarbook")

    try:
        roles = social.load_roles()
    except CellarError as e:
        notifier.error(str(e))
        roles = None

    pages = ["🍾 Cellar", "🥂 Consumed", "⭐ Ratings", "👥 Friends", "👤 Profile"]
    if roles is not None and roles.is_admin_or_owner:
        pages.append("🛠 Admin")
    tabs = st.tabs(pages)

    with tabs[0]:
        cellar_page()
    with tabs[1]:
        consumed_page()
    with tabs[2]:
        ratings_page()
    with tabs[3]:
        friends_page()
    with tabs[4]:
        profile_page()
    if len(tabs) > 5:
        with tabs[5]:
            admin_page(roles)

    with st.sidebar:
        if roles is not None and roles.is_owner:
            st.caption("Owner")
        if st.button("Sign out of Supabase"):
            sign_out(sb)
            st.rerun()


if __name__ == "__main__":
    main()
