from decimal import Decimal

from rest_framework import serializers

from .models import CompensationProfile


class CompensationProfileSerializer(serializers.ModelSerializer):
    """Body of ``PUT /commissions/<userId>`` and the ``profile`` block of reads."""
    userId = serializers.IntegerField(source='user_id', read_only=True)
    hasFixedSalary = serializers.BooleanField(source='has_fixed_salary', required=False, default=False)
    fixedSalary = serializers.DecimalField(
        source='fixed_salary', max_digits=12, decimal_places=2, min_value=0,
        required=False, allow_null=True, coerce_to_string=False,
    )
    hourRate = serializers.DecimalField(
        source='hour_rate', max_digits=10, decimal_places=2, min_value=0,
        required=False, default=Decimal('0.00'), coerce_to_string=False,
    )
    effectiveFrom = serializers.DateField(source='effective_from', required=False, allow_null=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = CompensationProfile
        fields = ['userId', 'hasFixedSalary', 'fixedSalary', 'hourRate', 'effectiveFrom', 'updatedAt']

    def validate(self, attrs):
        if attrs.get('has_fixed_salary') and attrs.get('fixed_salary') is None:
            raise serializers.ValidationError({'fixedSalary': "Required when hasFixedSalary is true."})
        return attrs


class CommissionSummarySerializer(serializers.Serializer):
    userId = serializers.IntegerField(source='user_id')
    minutesCompleted = serializers.IntegerField(source='minutes_completed')
    variablePay = serializers.DecimalField(source='variable_pay', max_digits=14, decimal_places=2, coerce_to_string=False)
    fixedSalary = serializers.DecimalField(source='fixed_salary', max_digits=14, decimal_places=2, coerce_to_string=False)
    totalPay = serializers.DecimalField(source='total_pay', max_digits=14, decimal_places=2, coerce_to_string=False)
    hasFixedSalary = serializers.BooleanField(source='has_fixed_salary')
    hourRate = serializers.DecimalField(source='hour_rate', max_digits=12, decimal_places=2, coerce_to_string=False)


class CommissionListItemSerializer(CommissionSummarySerializer):
    """Summary row of the commission list, with who it belongs to."""
    name = serializers.CharField(source='user.name')
    email = serializers.EmailField(source='user.email')
    role = serializers.CharField(source='user.role')
