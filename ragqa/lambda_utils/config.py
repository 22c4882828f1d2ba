"""
Secrets resolution for Lambda.

Fills the database password into DATABASE_URL from Secrets Manager before
settings are first read.
"""

import json
import logging
import os
from urllib.parse import quote_plus

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ragqa.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PASSWORD_PLACEHOLDER = "placeholder"


def configure_secrets() -> None:
    """
    Replace the DATABASE_URL password placeholder with the DB secret.

    Does nothing unless DATABASE_URL contains the placeholder and
    DB_SECRET_ARN is set.

    Raises:
        ConfigurationError: Secret could not be read or has no password
    """
    db_url = os.getenv("DATABASE_URL", "")
    db_secret_arn = os.getenv("DB_SECRET_ARN")
    if PASSWORD_PLACEHOLDER not in db_url or not db_secret_arn:
        return

    client = boto3.session.Session().client("secretsmanager")
    try:
        response = client.get_secret_value(SecretId=db_secret_arn)
    except (ClientError, BotoCoreError) as e:
        logger.error("%s:configure_secrets - Failed to fetch DB secret: %s", __name__, e)
        raise ConfigurationError("Failed to fetch database secret") from e

    password = json.loads(response.get("SecretString") or "{}").get("password")
    if not password:
        raise ConfigurationError("Database secret has no password field")

    os.environ["DATABASE_URL"] = db_url.replace(PASSWORD_PLACEHOLDER, quote_plus(password))
    logger.info("%s:configure_secrets - Updated DATABASE_URL with secret", __name__)
