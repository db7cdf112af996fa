from rest_framework import serializers  # type: ignore


class SettingsField(serializers.DictField):
    """A flat ``{key: value}`` mapping of settings."""

    child = serializers.CharField(allow_blank=True, trim_whitespace=False)

    def to_internal_value(self, data):  # type: ignore
        values = super().to_internal_value(data)
        too_long = [key for key in values if not key or len(key) > 100]
        if too_long:
            raise serializers.ValidationError({key: "Setting keys must be 1-100 characters." for key in too_long})
        return values
