import os
import logging

# ---------------------------------------------------
# BRANDING INFO (override through environment)
# ---------------------------------------------------
COMPANY_INFO = {
    "name": os.environ.get("GST_COMPANY_NAME", "Pasada Interiors Pvt. Ltd."),
    "gstin": os.environ.get("GST_COMPANY_GSTIN", "29ABCDE1234F1Z5"),
    "state_code": os.environ.get("GST_COMPANY_STATE_CODE", ""),
    "address": os.environ.get("GST_COMPANY_ADDRESS", "Indiranagar, Bengaluru, Karnataka"),
    "contact": os.environ.get("GST_COMPANY_CONTACT", "+918050123456"),
    "email": os.environ.get("GST_COMPANY_EMAIL", "info@pasada.design"),
    "logo_path": os.environ.get("GST_LOGO_PATH", "data/logo.png"),  # optional
}

# state code follows the GSTIN prefix unless set explicitly
if not COMPANY_INFO["state_code"]:
    COMPANY_INFO["state_code"] = COMPANY_INFO["gstin"][:2]

HSN_DATA_PATH = os.environ.get("GST_HSN_DATA_PATH", "data/hsn_sac_master.csv")

DEFAULT_TAX_RATE = 18.0

LOG_LEVEL = os.environ.get("GST_LOG_LEVEL", "INFO")


def configure_logging(level=None):
    """Set up root logging once for the app process."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
