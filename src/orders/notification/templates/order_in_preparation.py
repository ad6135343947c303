"""Order in preparation template — sent when an order enters IN_PREPARATION."""

from orders.notification.templates.formatting import format_amount


class OrderInPreparationTemplate:
    subject = "Order In Preparation"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": OrderInPreparationTemplate.subject,
            "body": (
                "Your order is being prepared!\n\n"
                f"Hello {context.get('customer_name', '')},\n\n"
                "Your order is being prepared for shipment.\n\n"
                "Order details:\n"
                f"  Order ID: {context.get('order_id', 'N/A')}\n"
                f"  Amount: {format_amount(context.get('amount'))}\n"
                f"  Status: {context.get('status', 'N/A')}\n\n"
                "We will send you the shipping details shortly.\n\n"
                "Kind regards,\nThe Orders Team"
            ),
        }
