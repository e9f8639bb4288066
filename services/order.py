import logging

from sqlalchemy.ext.asyncio import AsyncSession

from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from exceptions import (
    EmptyOrderException,
    InsufficientStockException,
    InvalidQuantityException,
    OrderNotFoundException,
    OrderOwnershipException,
    ProductNotFoundException,
)
from models.order import OrderDTO, OrderRequestDTO
from models.orderItem import OrderItemDTO
from models.user import UserDTO
from repositories.order import OrderRepository
from repositories.product import ProductRepository
from utils.permission_utils import can_view_order
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class OrderService:

    @staticmethod
    @TransactionManager.with_retry()
    async def create_order(user: UserDTO, request: OrderRequestDTO, session: AsyncSession) -> OrderDTO:
        """
        Places an order: validates and takes stock for every line, then persists the order.

        Flow (one transaction, lines processed in request order):
        1. Reject an empty item list
        2. For each line: product must exist and have enough stock;
           stock is taken with a conditional decrement
        3. Total = sum(unit price * quantity), computed here, never trusted from the client
        4. Persist order and lines, commit

        Any failure rolls back every stock decrement of this request.

        Args:
            user: Authenticated caller (becomes the order owner)
            request: Requested lines plus shipping address and payment method
            session: Database session

        Returns:
            The persisted OrderDTO

        Raises:
            EmptyOrderException: No items requested
            InvalidQuantityException: A line quantity below 1
            ProductNotFoundException: A line references an unknown product
            InsufficientStockException: Requested quantity exceeds stock
        """
        if not request.items:
            raise EmptyOrderException()

        async with TransactionManager.atomic_transaction(session):
            total_amount = 0.0
            lines: list[OrderItemDTO] = []

            for item in request.items:
                if item.quantity < 1:
                    raise InvalidQuantityException(item.product_id, item.quantity)

                product = await ProductRepository.get_by_id(item.product_id, session)
                if product is None:
                    raise ProductNotFoundException(item.product_id)

                if product.stock < item.quantity:
                    raise InsufficientStockException(product.id, product.name, item.quantity, product.stock)

                # The stock check above can race with another order; the conditional update cannot
                taken = await ProductRepository.decrement_stock_if_available(product.id, item.quantity, session)
                if not taken:
                    current = await ProductRepository.get_by_id(product.id, session)
                    raise InsufficientStockException(product.id, product.name, item.quantity,
                                                     current.stock if current else 0)

                total_amount += product.price * item.quantity
                lines.append(OrderItemDTO(
                    product_id=product.id,
                    quantity=item.quantity,
                    price=product.price,
                    customization=item.customization,
                ))

            order = await OrderRepository.create(OrderDTO(
                user_id=user.id,
                items=lines,
                total_amount=round(total_amount, 2),
                status=OrderStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
                payment_method=request.payment_method,
                shipping_address=request.shipping_address,
            ), session)

        logger.info(f"Order {order.id} created for user {user.id}: "
                    f"{len(lines)} line(s), total {order.total_amount:.2f}")
        return order

    @staticmethod
    async def get_orders_page(page: int, limit: int, session: AsyncSession,
                              user_id: int | None = None) -> tuple[list[OrderDTO], int]:
        """
        One page of orders, newest first, plus the total matching the same filter.

        Args:
            user_id: Only this user's orders; None lists every order (admin view)
        """
        offset = (page - 1) * limit
        orders = await OrderRepository.get_page(offset, limit, session, user_id=user_id)
        total = await OrderRepository.count(session, user_id=user_id)
        return orders, total

    @staticmethod
    async def get_order(order_id: int, user: UserDTO, session: AsyncSession) -> OrderDTO:
        order = await OrderRepository.get_by_id(order_id, session)
        if order is None:
            raise OrderNotFoundException(order_id)
        if not can_view_order(user, order):
            logger.warning(f"User {user.id} tried to read order {order_id} owned by {order.user_id}")
            raise OrderOwnershipException(order_id, user.id)
        return order

    @staticmethod
    async def update_status(order_id: int, status: OrderStatus, session: AsyncSession) -> OrderDTO:
        # No transition rules: admins may set any status
        async with TransactionManager.atomic_transaction(session):
            order = await OrderRepository.update_status(order_id, status, session)
            if order is None:
                raise OrderNotFoundException(order_id)
        logger.info(f"Order {order_id} status set to {status.value}")
        return order

    @staticmethod
    async def update_payment_status(order_id: int, payment_status: PaymentStatus,
                                    session: AsyncSession) -> OrderDTO:
        async with TransactionManager.atomic_transaction(session):
            order = await OrderRepository.update_payment_status(order_id, payment_status, session)
            if order is None:
                raise OrderNotFoundException(order_id)
        logger.info(f"Order {order_id} payment status set to {payment_status.value}")
        return order
