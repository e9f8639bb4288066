import logging

from enums.checkout_status import CheckoutStatus
from enums.payment_method import PaymentMethod
from exceptions import ApiRequestException, EmptyCartException
from models.order import OrderDTO, OrderRequestDTO, OrderLineRequestDTO, ShippingAddressDTO
from models.orderItem import OrderCustomizationDTO
from store.cart import CartItem, CartState, ClearCart
from store.checkout import CheckoutStarted, CheckoutSucceeded, CheckoutFailed
from store.store import Store
from client.api_client import ApiClient

logger = logging.getLogger(__name__)


class CheckoutFlow:
    """
    Turns the cart into an order.

    On success the cart is cleared and the order id recorded; on failure the
    error message is recorded in checkout state and the cart is left as is.
    """

    INTERRUPTED_MESSAGE = "Checkout was interrupted. Please try again."

    def __init__(self, store: Store, api_client: ApiClient):
        self.store = store
        self.api_client = api_client

    @staticmethod
    def _line(item: CartItem) -> OrderLineRequestDTO:
        custom = item.customization
        customization = OrderCustomizationDTO(
            size=item.size,
            color=custom.color if custom else None,
            print_location=custom.print_location if custom else None,
            custom_text=custom.custom_text if custom else None,
            design_url=custom.design_url if custom else None,
        )
        return OrderLineRequestDTO(product_id=item.product_id, quantity=item.quantity, customization=customization)

    @staticmethod
    def build_order_request(cart: CartState, shipping_address: ShippingAddressDTO,
                            payment_method: PaymentMethod) -> OrderRequestDTO:
        if cart.is_empty:
            raise EmptyCartException()
        return OrderRequestDTO(
            items=[CheckoutFlow._line(item) for item in cart.items],
            shipping_address=shipping_address,
            payment_method=payment_method,
        )

    async def submit(self, shipping_address: ShippingAddressDTO,
                     payment_method: PaymentMethod) -> OrderDTO | None:
        """
        Places the order for the current cart.

        Returns:
            The created order, or None when checkout failed (see checkout state)
        """
        if self.store.state.checkout.status == CheckoutStatus.SUBMITTING:
            logger.debug("Checkout already submitting, ignoring repeated submit")
            return None

        self.store.dispatch(CheckoutStarted())
        try:
            order_request = self.build_order_request(self.store.state.cart, shipping_address, payment_method)
            order = await self.api_client.create_order(order_request)
        except (EmptyCartException, ApiRequestException) as e:
            logger.warning(f"Checkout failed: {e.message}")
            self.store.dispatch(CheckoutFailed(message=e.message))
            return None
        except BaseException:
            # Cancelled or unexpected failure: move out of SUBMITTING so a retry is accepted
            self.store.dispatch(CheckoutFailed(message=self.INTERRUPTED_MESSAGE))
            raise

        self.store.dispatch(ClearCart())
        self.store.dispatch(CheckoutSucceeded(order_id=order.id))
        logger.info(f"Checkout completed, order {order.id}")
        return order
