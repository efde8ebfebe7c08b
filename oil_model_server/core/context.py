# oil_model_server/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
username_ctx = contextvars.ContextVar("username", default=None)
