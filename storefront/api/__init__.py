# storefront/api/__init__.py
from fastapi import FastAPI
from storefront.api.routers import health, users, products, reviews, carts, addresses, orders, payments


def create_app(**kwargs) -> FastAPI:
    app = FastAPI(title="Storefront", version="1.0.0", **kwargs)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(reviews.router)
    app.include_router(carts.router)
    app.include_router(addresses.router)
    app.include_router(orders.router)
    app.include_router(payments.router)

    return app
