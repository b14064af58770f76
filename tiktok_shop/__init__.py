"""TikTok Shop Open API client bootstrap.

Usage example:
    from tiktok_shop import TikTokShopClient, load_credentials, ClientConfig
    client = TikTokShopClient(load_credentials(), ClientConfig(sandbox=True))
    resp = client.api.ProductV202502Api.products_search_post(1, client.credentials.access_token, 'application/json')
"""
from .exceptions import (  # noqa: F401
    TikTokShopError,
    MissingCredential,
    ApiRequestError,
    TransportFailure,
    ApiError,
    ApiAuthError,
    ApiParameterError,
    ApiRateLimitError,
)
from .config import ClientConfig, Credentials, load_credentials  # noqa: F401
from .base_client import ApiResponse  # noqa: F401
from .client import TikTokShopClient  # noqa: F401
