# app/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    INTERNAL_ERROR = "INTERNAL_ERROR"

    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_SKU_EXISTS = "PRODUCT_SKU_EXISTS"

    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CATEGORY_NAME_EXISTS = "CATEGORY_NAME_EXISTS"

    SUPPLIER_NOT_FOUND = "SUPPLIER_NOT_FOUND"
