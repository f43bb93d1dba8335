"""Internal modules for the SQS Heavy Lifter.

WARNING: This package contains implementation details of HeavyLifter.
These are not intended for direct use in application code.

Modules:
    sizing - Message size accounting
    aws - boto3 client construction and queue/blob adapters
"""
