"""Order shipped template — sent when an order enters SHIPPED."""

from orders.notification.templates.formatting import format_amount, format_timestamp


class OrderShippedTemplate:
    subject = "Order Shipped"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": OrderShippedTemplate.subject,
            "body": (
                "Your order has shipped!\n\n"
                f"Hello {context.get('customer_name', '')},\n\n"
                "Your order is on its way.\n\n"
                "Order details:\n"
                f"  Order ID: {context.get('order_id', 'N/A')}\n"
                f"  Amount: {format_amount(context.get('amount'))}\n"
                f"  Status: {context.get('status', 'N/A')}\n"
                f"  Shipped at: {format_timestamp(context.get('shipped_at'))}\n"
                f"  Shipment reference: {context.get('shipment_reference') or 'N/A'}\n\n"
                "Thank you for your purchase!\n\n"
                "Kind regards,\nThe Orders Team"
            ),
        }
