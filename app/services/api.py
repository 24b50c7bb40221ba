# app/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the FastAPI backend
FASTAPI_URL = os.getenv("AQUALIMS_API_URL", "http://localhost:8000")


def _auth(access_token):
    return {"Authorization": f"Bearer {access_token}"}


def _request(method, path, access_token=None, **kwargs):
    """
    Sends a request to the backend.
    Returns the decoded JSON body, or {"error": message} on any failure.
    """
    headers = _auth(access_token) if access_token else {}
    try:
        res = requests.request(method, f"{FASTAPI_URL}{path}", headers=headers, timeout=10, **kwargs)
    except requests.RequestException as e:
        return {"error": f"Server unreachable: {e}"}

    try:
        body = res.json()
    except ValueError:
        body = {}

    if res.status_code >= 400:
        message = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail")
        return {"error": str(message or f"Server error: {res.status_code}")}
    return body


def _data(result):
    if isinstance(result, dict) and "error" not in result and "data" in result:
        return result["data"]
    return result


# -------------------------------
# Authentication-related functions
# -------------------------------

def login_user(identifier, password):
    """
    Logs in with a username or email and returns the access token.
    """
    return _request("POST", "/token", data={"username": identifier, "password": password})


def get_user_info(access_token):
    """
    Retrieves the current user's profile using the access token.
    """
    return _request("GET", "/users/me", access_token)


# -------------------------
# Lab Records
# -------------------------

def get_options():
    return _request("GET", "/options")


def get_grid(access_token, day):
    return _data(_request("GET", f"/grid/{day}", access_token))


def save_grid(access_token, day, cells):
    """
    Saves every cell of the daily grid and returns the saved count and reloaded grid.
    """
    return _data(_request("POST", f"/grid/{day}/save", access_token, json={"cells": cells}))


def list_records(access_token, **filters):
    params = {k: v for k, v in filters.items() if v}
    result = _request("GET", "/records", access_token, params=params)
    if isinstance(result, dict) and result.get("error"):
        return result
    return {"records": result["data"], "active_filters": result["active_filters"]}


def create_record(access_token, entry):
    return _data(_request("POST", "/records", access_token, json=entry))


def update_record(access_token, record_id, entry):
    return _data(_request("PUT", f"/records/{record_id}", access_token, json=entry))


# -------------------------
# User Management
# -------------------------

def list_users(access_token):
    return _request("GET", "/users", access_token)


def create_user(access_token, username, email, role):
    payload = {"username": username, "email": email, "role": role}
    return _request("POST", "/users", access_token, json=payload)


def toggle_user_status(access_token, user_id):
    return _request("POST", f"/users/{user_id}/toggle", access_token)


def reset_password(access_token, user_id, password):
    return _request("POST", f"/users/{user_id}/password", access_token, json={"password": password})
