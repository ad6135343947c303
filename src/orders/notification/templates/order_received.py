"""Order received template — sent when an order enters RECEIVED."""

from orders.notification.templates.formatting import format_amount, format_timestamp


class OrderReceivedTemplate:
    subject = "Order Received - Confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": OrderReceivedTemplate.subject,
            "body": (
                "Order received successfully!\n\n"
                f"Hello {context.get('customer_name', '')},\n\n"
                "Your order has been received and is being processed.\n\n"
                "Order details:\n"
                f"  Order ID: {context.get('order_id', 'N/A')}\n"
                f"  Amount: {format_amount(context.get('amount'))}\n"
                f"  Status: {context.get('status', 'N/A')}\n"
                f"  Date: {format_timestamp(context.get('created_at'))}\n\n"
                "You will receive updates about your order soon.\n\n"
                "Kind regards,\nThe Orders Team"
            ),
        }
