from app.models.voucher import VoucherModel
from app.models.sales import SalesByCustomerModel

__all__ = ["VoucherModel", "SalesByCustomerModel"]
