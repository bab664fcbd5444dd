"""Structural validation of service inputs.

Every mutating service operation runs its raw arguments through one of these
serializers before touching storage; failures surface as
`cookbook.exceptions.ValidationError`.
"""

import math
from datetime import timedelta
from decimal import Decimal

from django.utils.dateparse import iso8601_duration_re, parse_duration
from rest_framework import serializers

from cookbook.exceptions import ValidationError
from cookbook.models import User

MAX_DURATION = timedelta(seconds=2**31 - 1)

NUTRITION_MAX = Decimal("99999999.99")
TWO_PLACES = Decimal("0.01")


def validated(serializer_class, data):
    """Return validated data or raise ValidationError naming every bad field."""
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ValidationError(_flatten(serializer.errors))
    return serializer.validated_data


def _flatten(errors):
    parts = []
    for field, messages in errors.items():
        if isinstance(messages, dict):
            messages = [_flatten(messages)]
        text = " ".join(str(m) for m in messages)
        parts.append(text if field == "non_field_errors" else f"{field}: {text}")
    return "; ".join(parts)


def parse_iso_duration(value):
    """Parse a non-negative ISO-8601 duration such as "PT1H30M"."""
    if not iso8601_duration_re.match(value or ""):
        raise serializers.ValidationError("Invalid ISO 8601 duration format")
    duration = parse_duration(value)
    if duration is None:
        raise serializers.ValidationError("Invalid ISO 8601 duration format")
    if duration < timedelta(0):
        raise serializers.ValidationError("Negative duration")
    if duration > MAX_DURATION:
        raise serializers.ValidationError("Duration overflow")
    return duration


class GenderField(serializers.ChoiceField):
    """Gender choice accepting any letter case ("MALE", "female", ...)."""

    def __init__(self, **kwargs):
        super().__init__(choices=[g for g, _ in User.GENDERS], **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().capitalize()
        return super().to_internal_value(data)


class NutritionField(serializers.FloatField):
    """Amount stored as decimal(10,2); values <= 0 mean unknown and become None."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if not math.isfinite(value):
            self.fail("invalid")
        if value <= 0:
            return None
        if value > NUTRITION_MAX:
            self.fail("max_value", max_value=NUTRITION_MAX)
        amount = Decimal(str(value)).quantize(TWO_PLACES)
        if amount > NUTRITION_MAX:
            self.fail("max_value", max_value=NUTRITION_MAX)
        return amount


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    gender = GenderField()
    birthday = serializers.DateField(required=False, allow_null=True)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    password = serializers.CharField(trim_whitespace=False)

    def validate_password(self, value):
        if not value.strip():
            raise serializers.ValidationError("This field may not be blank.")
        return value

    def validate(self, attrs):
        if attrs.get("birthday") is None and attrs.get("age") is None:
            raise serializers.ValidationError("Either birthday or age is required")
        return attrs


class ProfileUpdateSerializer(serializers.Serializer):
    gender = GenderField(required=False, allow_null=True)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class RecipeInputSerializer(serializers.Serializer):
    """Recipe fields supplied by an author."""
    name = serializers.CharField(max_length=500)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    cook_time = serializers.CharField(required=False, allow_null=True)
    prep_time = serializers.CharField(required=False, allow_null=True)
    date_published = serializers.DateTimeField(required=False, allow_null=True)
    servings = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    recipe_yield = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    ingredients = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False, max_length=500),
        required=False,
        default=list,
    )

    calories = NutritionField()
    fat_content = NutritionField()
    saturated_fat_content = NutritionField()
    cholesterol_content = NutritionField()
    sodium_content = NutritionField()
    carbohydrate_content = NutritionField()
    fiber_content = NutritionField()
    sugar_content = NutritionField()
    protein_content = NutritionField()

    def validate_cook_time(self, value):
        if value is not None:
            parse_iso_duration(value)
        return value

    def validate_prep_time(self, value):
        if value is not None:
            parse_iso_duration(value)
        return value


class RecipeTimesSerializer(serializers.Serializer):
    cook_time = serializers.CharField(required=False, allow_null=True)
    prep_time = serializers.CharField(required=False, allow_null=True)

    def validate_cook_time(self, value):
        return None if value is None else parse_iso_duration(value)

    def validate_prep_time(self, value):
        return None if value is None else parse_iso_duration(value)


class ReviewInputSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    text = serializers.CharField()


class ReviewListSerializer(serializers.Serializer):
    SORT_DATE_DESC = "date_desc"
    SORT_LIKES_DESC = "likes_desc"

    page = serializers.IntegerField(min_value=1, default=1)
    size = serializers.IntegerField(min_value=1, max_value=200, default=20)
    sort = serializers.ChoiceField(choices=[SORT_DATE_DESC, SORT_LIKES_DESC], default=SORT_DATE_DESC)


def positive_id(value, label):
    """Raise ValidationError unless value is a positive integer id."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{label} must be a positive integer")
    return value
