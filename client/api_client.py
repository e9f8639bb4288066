"""
aiohttp client for the FashionHub REST API.

Every response is a {success, data | error} envelope; the client returns
the unwrapped `data` as DTOs and raises ApiRequestException otherwise.
"""

import asyncio
import logging
from typing import Any, Callable

import aiohttp
from pydantic import ValidationError

import config
from enums.product_category import ProductCategory
from exceptions import ApiRequestException
from models.order import OrderDTO, OrderRequestDTO
from models.product import ProductDTO

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


class ApiClient:

    def __init__(self, base_url: str | None = None, token_provider: TokenProvider | None = None,
                 session: aiohttp.ClientSession | None = None, timeout_seconds: float = 10.0):
        self.base_url = (base_url or config.API_BASE_URL).rstrip('/')
        self._token_provider = token_provider
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def __aenter__(self) -> 'ApiClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    def _headers(self) -> dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers['Authorization'] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, json: Any = None,
                       params: dict[str, Any] | None = None) -> dict:
        """
        Performs one request and returns the success envelope.

        Raises:
            ApiRequestException: Transport failure, non-JSON body, or an error envelope
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            async with self._get_session().request(method, url, json=json, params=params,
                                                   headers=self._headers()) as response:
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = None
                status = response.status
        except aiohttp.ClientError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiRequestException(f"Could not reach the server: {e}", path=path)
        except asyncio.TimeoutError:
            logger.warning(f"{method} {path} timed out after {self._timeout.total}s")
            raise ApiRequestException("The server took too long to respond", path=path)

        if not isinstance(payload, dict):
            raise ApiRequestException(f"Unexpected response from server (HTTP {status})", status, path)
        if status >= 400 or not payload.get('success'):
            message = payload.get('error') or f"Request failed with HTTP {status}"
            logger.info(f"{method} {path} -> {status}: {message}")
            raise ApiRequestException(message, status, path)
        return payload

    @staticmethod
    def _parse(model, data: Any, path: str):
        try:
            if isinstance(data, list):
                return [model.model_validate(entry) for entry in data]
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiRequestException(f"Malformed response data: {e.error_count()} error(s)", path=path)

    async def get_products(self, category: ProductCategory | None = None,
                           page: int = 1, limit: int = 100) -> list[ProductDTO]:
        params = {'category': category.value if category else None, 'page': page, 'limit': limit}
        payload = await self._request('GET', '/products', params=params)
        return self._parse(ProductDTO, payload.get('data', []), '/products')

    async def get_all_products(self, category: ProductCategory | None = None,
                               limit: int = 100) -> list[ProductDTO]:
        """Walks `pagination.next` until the last page and returns every product."""
        products: list[ProductDTO] = []
        page = 1
        while page is not None:
            params = {'category': category.value if category else None, 'page': page, 'limit': limit}
            payload = await self._request('GET', '/products', params=params)
            products.extend(self._parse(ProductDTO, payload.get('data', []), '/products'))
            next_page = (payload.get('pagination') or {}).get('next')
            page = next_page.get('page') if next_page else None
        return products

    async def get_product(self, product_id: int) -> ProductDTO:
        path = f"/products/{product_id}"
        payload = await self._request('GET', path)
        return self._parse(ProductDTO, payload.get('data'), path)

    async def create_order(self, order_request: OrderRequestDTO) -> OrderDTO:
        payload = await self._request('POST', '/orders', json=order_request.model_dump(mode='json'))
        return self._parse(OrderDTO, payload.get('data'), '/orders')

    async def get_my_orders(self, page: int = 1, limit: int | None = None) -> list[OrderDTO]:
        payload = await self._request('GET', '/orders/my', params={'page': page, 'limit': limit})
        return self._parse(OrderDTO, payload.get('data', []), '/orders/my')

    async def get_orders(self, page: int = 1, limit: int | None = None) -> list[OrderDTO]:
        payload = await self._request('GET', '/orders', params={'page': page, 'limit': limit})
        return self._parse(OrderDTO, payload.get('data', []), '/orders')

    async def get_order(self, order_id: int) -> OrderDTO:
        path = f"/orders/{order_id}"
        payload = await self._request('GET', path)
        return self._parse(OrderDTO, payload.get('data'), path)
