# app/ui/categories.py

import streamlit as st
from services.api import (
    list_categories,
    create_category,
    update_category,
    delete_category,
    get_image_url,
)


def categories_page(on_unauthorized):
    st.title("🗂️ 카테고리 관리")

    token = st.session_state["access_token"]

    categories = list_categories(token)
    if isinstance(categories, dict) and categories.get("error"):
        if categories.get("status") == 401:
            on_unauthorized()
            return
        st.error(categories["error"])
        return

    if st.button("➕ 카테고리 추가"):
        st.session_state["show_add_category"] = not st.session_state.get("show_add_category", False)

    if st.session_state.get("show_add_category"):
        handle_category_create(token)

    if not categories:
        st.info("등록된 카테고리가 없습니다.")
        return

    for category in categories:
        render_category(token, category)


def handle_category_create(token):
    with st.form("create_category_form", clear_on_submit=True):
        name = st.text_input("카테고리 이름")
        item_count = st.number_input("상품 수", min_value=0, step=1, value=0)
        image = st.file_uploader("대표 이미지", type=["png", "jpg", "jpeg", "gif", "webp"])
        submitted = st.form_submit_button("✅ 카테고리 생성")

    if submitted:
        if not name.strip():
            st.error("카테고리 이름을 입력해주세요.")
            return
        result = create_category(token, name.strip(), int(item_count), image)
        if result.get("error"):
            st.error(result["error"])
            return
        st.session_state["show_add_category"] = False
        st.success(f"'{result['name']}' 생성 완료")
        st.rerun()


def render_category(token, category):
    col1, col2, col3 = st.columns([1.5, 5, 1])
    with col1:
        image_url = get_image_url(category.get("image"))
        if image_url:
            st.image(image_url)
        else:
            st.markdown("🖼️")
    with col2:
        st.markdown(f"**{category['name']}**  \n상품 {category['itemCount']}개")
    with col3:
        if st.button("✏️", key=f"edit-{category['id']}"):
            key = f"editing-{category['id']}"
            st.session_state[key] = not st.session_state.get(key, False)
        if st.button("🗑️", key=f"delete-{category['id']}"):
            result = delete_category(token, category["id"])
            if result.get("error"):
                st.error(result["error"])
            else:
                st.success(f"{category['name']} 삭제 완료")
                st.rerun()

    if st.session_state.get(f"editing-{category['id']}"):
        handle_category_edit(token, category)


def handle_category_edit(token, category):
    with st.form(f"edit_category_form-{category['id']}"):
        name = st.text_input("카테고리 이름", value=category["name"])
        item_count = st.number_input("상품 수", min_value=0, step=1, value=category["itemCount"])
        image = st.file_uploader("새 이미지 (선택)", type=["png", "jpg", "jpeg", "gif", "webp"])
        submitted = st.form_submit_button("💾 저장")

    if submitted:
        changed_name = name.strip() if name.strip() != category["name"] else None
        changed_count = int(item_count) if int(item_count) != category["itemCount"] else None
        result = update_category(token, category["id"], changed_name, changed_count, image)
        if result.get("error"):
            st.error(result["error"])
            return
        st.session_state[f"editing-{category['id']}"] = False
        st.rerun()
