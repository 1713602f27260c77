"""Service layer: operation variants, dispatcher and error hierarchy."""
