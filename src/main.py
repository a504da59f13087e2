"""
Module principal de l'application FastAPI d'administration.

Ce module configure et initialise l'instance FastAPI, ajoute le middleware CORS
et inclut les routeurs des différents domaines de l'API (authentification,
comptes, catalogue, réductions, commandes, avis, tableaux de bord).
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings

# --- Importer les routeurs ---
from src.auth.router import auth_router
from src.users.router import user_router
from src.roles.router import role_router, permission_router
from src.categories.router import category_router
from src.products.router import product_router
from src.attributes.router import attribute_router
from src.product_variants.router import variant_router
from src.discounts.router import discount_router
from src.orders.router import order_router
from src.feedback.router import feedback_router
from src.dashboards.router import dashboard_router

# Configurer le logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API d'administration: catalogue, variantes, réductions, commandes, comptes et avis clients.",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Range"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
prefix = settings.API_V1_PREFIX

# Authentification, comptes et droits
app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["Authentification"])
app.include_router(user_router, prefix=f"{prefix}/users", tags=["Utilisateurs"])
app.include_router(role_router, prefix=f"{prefix}/roles", tags=["Roles"])
app.include_router(permission_router, prefix=f"{prefix}/permissions", tags=["Permissions"])

# Catalogue
app.include_router(category_router, prefix=f"{prefix}/categories", tags=["Categories"])
app.include_router(product_router, prefix=f"{prefix}/products", tags=["Produits"])
app.include_router(attribute_router, prefix=f"{prefix}/attributes", tags=["Attributes"])
app.include_router(variant_router, prefix=f"{prefix}/variants", tags=["Product Variants"])
app.include_router(discount_router, prefix=f"{prefix}/discounts", tags=["Discounts"])

# Commandes et avis
app.include_router(order_router, prefix=f"{prefix}/orders", tags=["Orders"])
app.include_router(feedback_router, prefix=f"{prefix}/feedback", tags=["Feedback"])

# Tableaux de bord
app.include_router(dashboard_router, prefix=f"{prefix}/dashboards", tags=["Dashboards"])


@app.get(f"{prefix}/health", tags=["Health"])
async def health_check():
    return {"status": "ok", "message": "Server is running"}


logger.info(f"Application {settings.PROJECT_NAME} initialisée, routeurs montés sous {prefix}")
