# app/services/api.py

import os
import requests

# Base URL of the FastAPI backend
API_URL = os.getenv("API_URL", "http://localhost:8000")


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def _result(res, ok=(200, 201)):
    """
    Returns the JSON body on success, or {"error": message} on failure.
    """
    try:
        data = res.json()
    except ValueError:
        data = {}
    if res.status_code in ok:
        return data
    message = data.get("message") if isinstance(data, dict) else None
    return {"error": message or f"오류 발생: {res.status_code}", "status": res.status_code}


def _image_part(file_obj):
    if file_obj is None:
        return None
    return {"image": (file_obj.name, file_obj.getvalue(), file_obj.type)}


# -------------------------------
# Authentication-related functions
# -------------------------------

def register_user(username, email, password):
    """
    Creates an account. The user still has to log in afterwards.
    """
    try:
        res = requests.post(
            f"{API_URL}/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def login_user(email, password):
    """
    Logs in a user and returns {"token", "user"}.
    """
    try:
        res = requests.post(
            f"{API_URL}/api/auth/login",
            json={"email": email, "password": password},
        )
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def get_user_info(token):
    """
    Returns the logged-in user's profile; also tells whether a stored token is still valid.
    """
    try:
        res = requests.get(f"{API_URL}/api/auth/user", headers=_auth(token))
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


# -------------------------
# Category Management
# -------------------------

def list_categories(token):
    try:
        res = requests.get(f"{API_URL}/api/categories", headers=_auth(token))
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def create_category(token, name, item_count, image=None):
    try:
        res = requests.post(
            f"{API_URL}/api/categories",
            data={"name": name, "itemCount": item_count},
            files=_image_part(image),
            headers=_auth(token),
        )
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def update_category(token, category_id, name=None, item_count=None, image=None):
    """
    Sends only the fields that were given; the server keeps the rest.
    """
    data = {}
    if name:
        data["name"] = name
    if item_count is not None:
        data["itemCount"] = item_count
    try:
        res = requests.put(
            f"{API_URL}/api/categories/{category_id}",
            data=data,
            files=_image_part(image),
            headers=_auth(token),
        )
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def delete_category(token, category_id):
    try:
        res = requests.delete(f"{API_URL}/api/categories/{category_id}", headers=_auth(token))
        return _result(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def get_image_url(image_path):
    """
    Turns the server's `/uploads/...` path into an absolute URL.
    """
    if not image_path:
        return None
    return f"{API_URL}{image_path}"
