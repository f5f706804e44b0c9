"""
Service layer over the AWS SDK.

Each service wraps one boto3 client built from the shared configuration:
DynamoDB full table scans, ECS task launches and Lambda invocations.
"""
