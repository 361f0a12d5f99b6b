"""
PixelPerfect Graphix Configuration
Supports AWS Parameter Store for production secrets
"""
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Mapping

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


def get_parameter(name: str, default: str = "") -> str:
    """Get parameter from environment or AWS Parameter Store"""
    # Environment variable takes precedence
    env_key = name.upper().replace("-", "_").replace("/", "_")
    if env_key in os.environ:
        return os.environ[env_key]

    if os.environ.get("USE_PARAMETER_STORE"):
        path = os.environ.get("PARAMETER_STORE_PATH", "/pixelperfect/prod/")
        try:
            ssm = boto3.client("ssm", region_name=os.environ.get("AWS_REGION", "ap-south-1"))
            response = ssm.get_parameter(Name=f"{path}{name}", WithDecryption=True)
            return response["Parameter"]["Value"]
        except (BotoCoreError, ClientError) as e:
            logger.warning("Could not load %s%s from Parameter Store: %s", path, name, e)

    return default


class Config:
    """Base configuration"""
    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Razorpay
    RAZORPAY_KEY_ID = os.environ.get("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET = os.environ.get("RAZORPAY_KEY_SECRET", "")
    RAZORPAY_API_BASE = os.environ.get("RAZORPAY_API_BASE", "https://api.razorpay.com/v1")
    RAZORPAY_TIMEOUT = int(os.environ.get("RAZORPAY_TIMEOUT", "20"))

    # Webhooks
    WEBHOOK_SECRET = os.environ.get("WEBHOOK_SECRET", "")
    WEBHOOK_SIGNATURE_HEADER = "X-Razorpay-Signature"

    # Subscriptions
    SUBSCRIPTION_TOTAL_COUNT = int(os.environ.get("SUBSCRIPTION_TOTAL_COUNT", "12"))
    PLANS = {
        "monthly": {
            "plan_id": os.environ.get("RAZORPAY_PLAN_MONTHLY", ""),
            "name": "Monthly Graphics Plan",
            "description": "Monthly subscription for premium templates",
            "amount": 4900,  # paise
        },
        "quarterly": {
            "plan_id": os.environ.get("RAZORPAY_PLAN_QUARTERLY", ""),
            "name": "Quarterly Graphics Plan",
            "description": "Quarterly subscription for premium templates",
            "amount": 9900,
        },
        "annual": {
            "plan_id": os.environ.get("RAZORPAY_PLAN_ANNUAL", ""),
            "name": "Annual Graphics Plan",
            "description": "Annual subscription for premium templates",
            "amount": 29900,
        },
    }

    # Site
    COMPANY_NAME = os.environ.get("COMPANY_NAME", "PixelPerfect Graphix")
    COMPANY_EMAIL = os.environ.get("COMPANY_EMAIL", "")
    SITE_HOST = os.environ.get("SITE_HOST", "pixelperfectgraphix.vercel.app")

    # App Version
    APP_VERSION = os.environ.get("APP_VERSION", "2025.1")
    BUILD_TIME = os.environ.get("BUILD_TIME", "")
    GIT_COMMIT = os.environ.get("GIT_COMMIT", "")


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Override with Parameter Store in production
    SECRET_KEY = get_parameter("secret-key", Config.SECRET_KEY)
    RAZORPAY_KEY_SECRET = get_parameter("razorpay-key-secret", Config.RAZORPAY_KEY_SECRET)
    WEBHOOK_SECRET = get_parameter("webhook-secret", Config.WEBHOOK_SECRET)


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    RAZORPAY_KEY_ID = "rzp_test_key"
    RAZORPAY_KEY_SECRET = "rzp_test_secret"
    WEBHOOK_SECRET = "test-webhook-secret"


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


@lru_cache()
def get_config(env: str = None):
    """Get configuration by environment name"""
    env = env or os.environ.get("FLASK_ENV", "development")
    return config.get(env, DevelopmentConfig)


# ============ Typed settings handed to the blueprints ============

@dataclass(frozen=True)
class Plan:
    key: str
    plan_id: str
    name: str
    description: str
    amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.key,
            "plan_id": self.plan_id,
            "name": self.name,
            "description": self.description,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class WebhookSettings:
    secret: str = ""
    signature_header: str = "X-Razorpay-Signature"


@dataclass(frozen=True)
class GatewaySettings:
    key_id: str = ""
    key_secret: str = ""
    api_base: str = "https://api.razorpay.com/v1"
    timeout: int = 20
    total_count: int = 12

    @property
    def configured(self) -> bool:
        return bool(self.key_id and self.key_secret)


@dataclass(frozen=True)
class Settings:
    """
    Everything the request handlers need, read once from the Flask config.

    Built in create_app and passed to the blueprint factories so that views
    never look at the process environment.
    """
    webhook: WebhookSettings = field(default_factory=WebhookSettings)
    gateway: GatewaySettings = field(default_factory=GatewaySettings)
    plans: Mapping[str, Plan] = field(default_factory=dict)
    company_name: str = "PixelPerfect Graphix"
    company_email: str = ""
    site_host: str = ""

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Settings":
        plans = {
            key: Plan(
                key=key,
                plan_id=plan.get("plan_id", ""),
                name=plan.get("name", key),
                description=plan.get("description", ""),
                amount=int(plan.get("amount", 0)),
            )
            for key, plan in (mapping.get("PLANS") or {}).items()
        }
        return cls(
            webhook=WebhookSettings(
                secret=mapping.get("WEBHOOK_SECRET") or "",
                signature_header=mapping.get("WEBHOOK_SIGNATURE_HEADER") or "X-Razorpay-Signature",
            ),
            gateway=GatewaySettings(
                key_id=mapping.get("RAZORPAY_KEY_ID") or "",
                key_secret=mapping.get("RAZORPAY_KEY_SECRET") or "",
                api_base=(mapping.get("RAZORPAY_API_BASE") or "https://api.razorpay.com/v1").rstrip("/"),
                timeout=int(mapping.get("RAZORPAY_TIMEOUT") or 20),
                total_count=int(mapping.get("SUBSCRIPTION_TOTAL_COUNT") or 12),
            ),
            plans=plans,
            company_name=mapping.get("COMPANY_NAME") or "PixelPerfect Graphix",
            company_email=mapping.get("COMPANY_EMAIL") or "",
            site_host=mapping.get("SITE_HOST") or "",
        )

    def validate(self) -> List[str]:
        """Return configuration warnings; an empty list means fully configured"""
        warnings = []
        if not self.webhook.secret:
            warnings.append("WEBHOOK_SECRET not configured - webhooks will be rejected")
        if not self.gateway.configured:
            warnings.append("Razorpay credentials not configured - subscriptions disabled")
        missing = sorted(key for key, plan in self.plans.items() if not plan.plan_id)
        if missing:
            warnings.append(f"Plan IDs missing for: {', '.join(missing)}")
        return warnings

    def plan_id_for(self, plan_type: str) -> str:
        plan = self.plans.get(plan_type)
        return plan.plan_id if plan else ""
