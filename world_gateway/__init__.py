"""World info gateway: weather, country, currency and map lookups."""
