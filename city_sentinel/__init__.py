"""City Sentinel issue change notification service."""
