# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

from linenode.logging.decorator import Loggable, log_method
from linenode.logging.event_log import EventLog, read_log

__all__ = ["EventLog", "Loggable", "log_method", "read_log"]
