"""Official GST state codes (the two-digit prefix of every GSTIN)."""
from typing import Dict, List, Optional

GST_STATE_CODES: Dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "25": "Daman and Diu",
    "26": "Dadra and Nagar Haveli",
    "27": "Maharashtra",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
    "97": "Other Territory",
}

# only the states the business commonly ships to
NEIGHBORING_STATES: Dict[str, List[str]] = {
    "29": ["27", "30", "32", "33", "36"],
    "27": ["23", "22", "24", "29", "30", "36"],
    "33": ["32", "29", "37", "34"],
    "32": ["33", "29"],
}


def get_state_code_by_name(state_name: str) -> Optional[str]:
    normalized = state_name.strip().lower()
    for code, name in GST_STATE_CODES.items():
        if name.lower() == normalized:
            return code
    return None


def get_state_name_by_code(state_code: str) -> Optional[str]:
    return GST_STATE_CODES.get(state_code)


def get_all_states() -> List[Dict[str, str]]:
    return [{"code": code, "name": name} for code, name in GST_STATE_CODES.items()]


def is_valid_state_code(state_code: str) -> bool:
    return state_code in GST_STATE_CODES


def are_neighboring_states(state1: str, state2: str) -> bool:
    return (state2 in NEIGHBORING_STATES.get(state1, [])
            or state1 in NEIGHBORING_STATES.get(state2, []))
