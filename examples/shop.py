"""
sslguard shop example

This example demonstrates:
- Securing single actions of a controller ("users": login, register)
- Securing every action of a controller ("checkout": "*")
- Securing a whole routing prefix ("admin")
- Handling the decision by hand on a route group with autoRedirect off

To run this application:
    SSLGUARD_POLICY_FILE=policy.json uvicorn shop:app --reload --port 8000
or
    sslguard dev --app-file shop.py
"""

import sys
import os

# Add parent directory to path to import sslguard
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from sslguard import App, Request, Router, SecureRouteMiddleware, load_policy_from_env
from sslguard.logger import configure_logging
from sslguard.middleware import DECISION_STATE_KEY, decision_response
from sslguard.response import text_response, json_response

logger = configure_logging(environment="example")

policy = load_policy_from_env()

app = App()


# Custom logging middleware
async def logging_middleware(request: Request, call_next):
    response = await call_next(request)
    logger.info(f"{request.method} {request.target_path} -> {response.status_code}")
    return response


app.add_middleware(logging_middleware)
app.add_middleware(
    SecureRouteMiddleware(
        policy,
        trust_forwarded_headers=True,
        server_name=os.environ.get("SSLGUARD_SERVER_NAME"),
    )
)


@app.get("/", controller="pages", action="home")
async def home():
    return text_response("Welcome to the shop")


users = Router(prefix="/users", controller="users")


@users.route("/login", {"GET", "POST"})
async def login():
    return text_response("login form")


@users.get("/{username}")
async def profile(username: str):
    return json_response({"username": username})


checkout = Router(prefix="/checkout", controller="checkout")


@checkout.get("/cart")
async def cart():
    return text_response("cart")


@checkout.post("/pay")
async def pay(request: Request):
    # Only reached with a redirect pending when the policy sets autoRedirect to false
    redirect = decision_response(request.state[DECISION_STATE_KEY])
    if redirect is not None:
        return redirect
    return json_response({"paid": True})


admin = Router(controller="dashboard")


@admin.get("/")
async def index():
    return text_response("admin dashboard")


app.include_router(users)
app.include_router(checkout)
app.include_router(admin, prefix="/admin")
