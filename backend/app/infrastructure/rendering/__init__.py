from .contract_layout import build_contract_lines
from .reportlab_renderer import ReportLabContractRenderer

__all__ = [
    "build_contract_lines",
    "ReportLabContractRenderer",
]
