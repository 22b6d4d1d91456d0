from contrafuzz.client.http_caller import HttpCaller

__all__ = ["HttpCaller"]
