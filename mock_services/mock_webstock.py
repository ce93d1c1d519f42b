"""
mock_webstock.py — Mock Implementation of the WebStock SalesOrders API (REST)

This module provides a simulated WebStock backend for testing the relay end to end.
It exposes a simple FastAPI application that mimics the real SalesOrders endpoint.

Simulation Scenarios:
    • Successful order creation (HTTP 201)
    • Wrong basic-auth credentials (HTTP 401)
    • Duplicate SalesOrderNumber (HTTP 409)
    • Internal error for orders whose CustomerReference starts with "#FAIL" (HTTP 500)

Endpoints:
    POST /SalesOrders — Accepts a sales order document.

Port:
    Default: 8002 (HTTP)
"""

import logging
import os
import secrets
from typing import List

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel, ConfigDict

MOCK_USER = os.environ.get("WEBSTOCK_USER", "relay")
MOCK_PASS = os.environ.get("WEBSTOCK_PASS", "relay")

app = FastAPI(title="Mock WebStock")
security = HTTPBasic()
log = logging.getLogger(__name__)

# Every accepted order, in arrival order
RECEIVED_ORDERS: List[dict] = []


class IncomingSalesOrder(BaseModel):
    """
    The fields the mock inspects. All other WebStock fields are kept as extras.
    """
    model_config = ConfigDict(extra="allow")

    SalesOrderNumber: str
    CustomerReference: str = ""
    OrderLines: list = []


def reset():
    """Forgets all received orders."""
    RECEIVED_ORDERS.clear()


def check_credentials(credentials: HTTPBasicCredentials = Depends(security)):
    user_ok = secrets.compare_digest(credentials.username.encode(), MOCK_USER.encode())
    pass_ok = secrets.compare_digest(credentials.password.encode(), MOCK_PASS.encode())
    if not (user_ok and pass_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


@app.post("/SalesOrders", status_code=201)
def create_sales_order(order: IncomingSalesOrder, user: str = Depends(check_credentials)):
    """
    Accepts a sales order.

    Returns:
        dict: The assigned SalesOrderId and the echoed SalesOrderNumber.

    Raises:
        HTTPException(409): If the SalesOrderNumber was already received.
        HTTPException(500): If the CustomerReference starts with "#FAIL".
    """
    log.info(f"[WebStock] SalesOrder {order.SalesOrderNumber} von {user} erhalten "
             f"({len(order.OrderLines)} Regeln).")

    if order.CustomerReference.startswith("#FAIL"):
        log.error(f"[WebStock] Simulierter Fehler für {order.SalesOrderNumber}.")
        raise HTTPException(status_code=500, detail="Simulated WebStock failure")

    if any(o["SalesOrderNumber"] == order.SalesOrderNumber for o in RECEIVED_ORDERS):
        log.warning(f"[WebStock] SalesOrder {order.SalesOrderNumber} existiert bereits.")
        raise HTTPException(status_code=409, detail="SalesOrderNumber already exists")

    RECEIVED_ORDERS.append(order.model_dump())
    return {"SalesOrderId": len(RECEIVED_ORDERS), "SalesOrderNumber": order.SalesOrderNumber}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8002)
