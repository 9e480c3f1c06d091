"""
SQS long polling helper
"""
import json
import logging
from typing import Any, Dict, Optional

import botocore.client
from botocore.client import ClientError
from botocore.exceptions import BotoCoreError
from botocore.session import get_session

from dynaschema.constants import (
    DEFAULT_WAIT_TIME_SECONDS, DELAY_SECONDS, MAX_NUMBER_OF_MESSAGES, MESSAGE_BODY, MESSAGES, QUEUE_URL,
    RECEIPT_HANDLE, SQS_SERVICE_NAME, WAIT_TIME_SECONDS,
)
from dynaschema.exceptions import QueueError, SerializationError
from dynaschema.settings import get_settings_value

BOTOCORE_EXCEPTIONS = (BotoCoreError, ClientError)

log = logging.getLogger(__name__)


class SqsHelper(object):
    """
    Wraps polling an SQS queue, deleting messages and sending JSON messages.

    The botocore SQS client is passed in and shared by every call.
    """

    def __init__(self, client: Any, wait_time_seconds: int = DEFAULT_WAIT_TIME_SECONDS) -> None:
        self.client = client
        self.wait_time_seconds = wait_time_seconds

    @classmethod
    def from_settings(cls, region: Optional[str] = None, host: Optional[str] = None) -> 'SqsHelper':
        """
        Builds a helper with a botocore SQS client configured from settings
        """
        config = botocore.client.Config(
            connect_timeout=get_settings_value('connect_timeout_seconds'),
            read_timeout=get_settings_value('read_timeout_seconds'),
            max_pool_connections=get_settings_value('max_pool_connections'),
            retries={'max_attempts': get_settings_value('max_retry_attempts')})
        client = get_session().create_client(
            SQS_SERVICE_NAME, region or get_settings_value('region'), endpoint_url=host, config=config)
        return cls(client, wait_time_seconds=get_settings_value('queue_wait_time_seconds'))

    def poll(self, queue_url: str) -> Optional[Dict[str, Any]]:
        """
        Blocking call that long polls the queue for at most one message.

        Returns None if no message is available within the wait time.
        """
        try:
            data = self.client.receive_message(**{
                QUEUE_URL: queue_url,
                MAX_NUMBER_OF_MESSAGES: 1,
                WAIT_TIME_SECONDS: self.wait_time_seconds,
            })
        except BOTOCORE_EXCEPTIONS as e:
            raise QueueError("Failed to receive message: {}".format(e), e)

        messages = data.get(MESSAGES) or []
        if not messages:
            return None
        if len(messages) > 1:
            log.warning("Asked SQS for at most 1 message, but got %s, ignoring all but the first", len(messages))
        return messages[0]

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        """
        Deletes a message from the queue.

        Call this only after the message has been processed, so that every message is
        processed at least once.
        """
        try:
            self.client.delete_message(**{
                QUEUE_URL: queue_url,
                RECEIPT_HANDLE: receipt_handle,
            })
        except BOTOCORE_EXCEPTIONS as e:
            raise QueueError("Failed to delete message: {}".format(e), e)

    def send_message_as_json(self, queue_url: str, payload: Any, delay_seconds: Optional[int] = None) -> None:
        """
        Sends `payload` encoded as a JSON string.

        :param delay_seconds: if set, the delay before the message becomes visible
        """
        try:
            message_body = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise SerializationError("Unable to serialize message: {}".format(e), e)

        operation_kwargs: Dict[str, Any] = {
            QUEUE_URL: queue_url,
            MESSAGE_BODY: message_body,
        }
        if delay_seconds is not None:
            operation_kwargs[DELAY_SECONDS] = delay_seconds
        try:
            self.client.send_message(**operation_kwargs)
        except BOTOCORE_EXCEPTIONS as e:
            raise QueueError("Failed to send message: {}".format(e), e)
