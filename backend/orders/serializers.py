from rest_framework import serializers

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    productName = serializers.CharField(source='product_name')
    price = serializers.FloatField()
    totalPrice = serializers.FloatField(source='total_price')

    class Meta:
        model = OrderItem
        fields = ['id', 'productName', 'quantity', 'price', 'totalPrice']


class TravelTimeSerializer(serializers.Serializer):
    duration = serializers.CharField()
    durationValue = serializers.IntegerField(source='duration_value')
    distance = serializers.CharField()
    distanceValue = serializers.FloatField(source='distance_value')
    estimatedArrivalTime = serializers.DateTimeField(source='estimated_arrival_time')


def delivery_address(order: Order) -> dict:
    """Stored shipping fields, passed through for display."""
    destination = order.destination
    return {
        'street': order.shipping_address1,
        'city': order.shipping_city,
        'state': order.shipping_state,
        'zipCode': order.shipping_postal_code,
        'instructions': order.shipping_address2,
        'latitude': destination[0] if destination else None,
        'longitude': destination[1] if destination else None,
    }


class OrderSerializer(serializers.ModelSerializer):
    """Order as shown to drivers."""
    orderNumber = serializers.CharField(source='order_number')
    userId = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)
    total = serializers.FloatField(source='total_amount')
    deliveryStatus = serializers.CharField(source='delivery_status')
    paymentStatus = serializers.CharField(source='payment_status')
    orderNotes = serializers.CharField(source='notes')
    deliveryInstructions = serializers.CharField(source='delivery_instructions')
    deliveryAddress = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at')
    customerName = serializers.SerializerMethodField()
    customerPhone = serializers.SerializerMethodField()
    deliveryTime = serializers.CharField(source='delivery_time')

    class Meta:
        model = Order
        fields = [
            'id', 'orderNumber', 'userId', 'items', 'total', 'status',
            'deliveryStatus', 'paymentStatus', 'orderNotes', 'deliveryInstructions',
            'deliveryAddress', 'createdAt', 'customerName', 'customerPhone', 'deliveryTime',
        ]

    def get_userId(self, obj):
        return str(obj.customer_id) if obj.customer_id else ''

    def get_deliveryAddress(self, obj):
        return delivery_address(obj)

    def get_customerName(self, obj):
        customer = obj.customer
        if customer is not None:
            full_name = customer.get_full_name()
            if full_name:
                return full_name
        return obj.shipping_first_name or 'Customer'

    def get_customerPhone(self, obj):
        customer = obj.customer
        if customer is not None and customer.phone_number:
            return customer.phone_number
        return obj.phone


class CandidateSerializer(serializers.Serializer):
    """Nearby-order candidate: the order plus distance and optional travel time."""

    def to_representation(self, candidate):
        data = OrderSerializer(candidate.order, context=self.context).data
        # Items were loaded once for the whole batch
        data['items'] = OrderItemSerializer(candidate.items, many=True).data
        data['distance'] = round(candidate.distance, 2)
        data['travelTime'] = (
            TravelTimeSerializer(candidate.travel_time).data
            if candidate.travel_time is not None else None
        )
        return data
