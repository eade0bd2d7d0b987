from .queue_construct import QueueConstruct

__all__ = ["QueueConstruct"]
