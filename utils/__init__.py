"""ReachProbe Utils"""
from utils.logger     import get_logger, log
from utils.validators import validate_host, validate_port, validate_count
from utils.constants  import ProbeMethod, ProbeTimeouts, TIMEOUT_PROFILES, tcp_method
__all__ = ["get_logger", "log", "validate_host", "validate_port",
           "validate_count", "ProbeMethod", "ProbeTimeouts",
           "TIMEOUT_PROFILES", "tcp_method"]
