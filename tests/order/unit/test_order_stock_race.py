"""
Stock race protection: the conditional decrement is the final authority,
even when the preceding read saw enough stock.
"""

import pytest
from unittest.mock import patch

from exceptions import InsufficientStockException
from repositories.product import ProductRepository
from services.order import OrderService


class TestConditionalDecrement:

    @pytest.mark.asyncio
    async def test_decrement_refuses_to_go_negative(self, test_session, make_product):
        product = await make_product(stock=2)

        assert await ProductRepository.decrement_stock_if_available(product.id, 3, test_session) is False
        assert await ProductRepository.decrement_stock_if_available(product.id, 2, test_session) is True
        assert await ProductRepository.decrement_stock_if_available(product.id, 1, test_session) is False

        assert (await ProductRepository.get_by_id(product.id, test_session)).stock == 0

    @pytest.mark.asyncio
    async def test_decrement_unknown_product(self, test_session):
        assert await ProductRepository.decrement_stock_if_available(12345, 1, test_session) is False

    @pytest.mark.asyncio
    async def test_stale_read_cannot_oversell(self, test_session, make_product, make_user, order_request):
        """Another order took the last unit between our read and our decrement."""
        user = await make_user()
        product = await make_product(stock=1)
        stale = product.model_copy(update={'stock': 1})

        # Someone else buys the last unit
        await ProductRepository.decrement_stock_if_available(product.id, 1, test_session)
        await test_session.commit()

        real_get_by_id = ProductRepository.get_by_id
        calls = []

        async def first_read_is_stale(product_id, session):
            calls.append(product_id)
            if len(calls) == 1:
                return stale
            return await real_get_by_id(product_id, session)

        with patch('services.order.ProductRepository.get_by_id', side_effect=first_read_is_stale):
            with pytest.raises(InsufficientStockException) as exc_info:
                await OrderService.create_order(user, order_request((product.id, 1)), test_session)

        assert exc_info.value.available == 0
        assert (await ProductRepository.get_by_id(product.id, test_session)).stock == 0
