"""
Infrastructure adapter: AWS Secrets Manager -> ISecretStore.

load_into_env() runs once in the composition root, before Settings.from_env(),
so AIRSTACK_API_KEY can live in Secrets Manager instead of a .env file.
Variables already present in the environment win unless overwrite=True.
"""

import json
import os
from typing import Any, Optional

import boto3

from fantoken_chart.domain.ports.secret_store_port import ISecretStore
from fantoken_chart.infrastructure.observability.logging_utils import get_logger

logger = get_logger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes JSON secrets from AWS Secrets Manager."""

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        response = self._client.get_secret_value(SecretId=secret_id)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        loaded: list[str] = []
        for key, value in self.get_secret(secret_id).items():
            if key in os.environ and not overwrite:
                continue
            os.environ[key] = str(value)
            loaded.append(key)
        logger.info("Loaded %d value(s) from secret %s into the environment", len(loaded), secret_id)
        return loaded
