"""SNS publisher for newly created feedback."""
import asyncio
import json

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from feedback_service.core.errors import PublishError
from feedback_service.core.logging import get_logger

log = get_logger("broker.sns")


class SNSBroker:
    """Publish feedback messages to an AWS SNS topic."""

    def __init__(self, topic_arn: str, region: str = "us-east-1"):
        """Initialize SNS publisher.

        Args:
            topic_arn: ARN of SNS topic to publish to
            region: AWS region (default: us-east-1)
        """
        if not topic_arn:
            raise ValueError("SNS_TOPIC_ARN is required for the sns broker")
        self.topic_arn = topic_arn
        self.region = region
        self.sns_client = boto3.client("sns", region_name=region)

    async def publish(self, message: dict) -> None:
        """Publish one feedback message.

        The boto3 client is blocking, so the call runs in a worker thread.

        Raises:
            PublishError: If SNS rejects the message or is unreachable
        """
        feedback_id = str(message.get("id", ""))
        try:
            response = await asyncio.to_thread(
                self.sns_client.publish,
                TopicArn=self.topic_arn,
                Message=json.dumps(message, ensure_ascii=False),
                MessageAttributes={
                    "feedback_id": {
                        "DataType": "String",
                        "StringValue": feedback_id,
                    },
                },
            )
        except (ClientError, BotoCoreError) as e:
            log.error(f"Failed to publish feedback {feedback_id} to {self.topic_arn}: {e}")
            raise PublishError(f"broker sending feedback error: {e}") from e

        log.info(f"Published feedback {feedback_id} via SNS: {response['MessageId']}")

    async def close(self) -> None:
        self.sns_client.close()
