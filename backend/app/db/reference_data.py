"""Static reference data loaded by the seeder"""

# (name, code, revenue division)
ODISHA_DISTRICTS = [
    ("Angul", "ANG", "Northern"),
    ("Balangir", "BLN", "Southern"),
    ("Balasore", "BLS", "Central"),
    ("Bargarh", "BRG", "Northern"),
    ("Bhadrak", "BHD", "Central"),
    ("Boudh", "BDH", "Southern"),
    ("Cuttack", "CTC", "Central"),
    ("Deogarh", "DGR", "Northern"),
    ("Dhenkanal", "DKL", "Northern"),
    ("Gajapati", "GJP", "Southern"),
    ("Ganjam", "GNJ", "Southern"),
    ("Jagatsinghpur", "JSP", "Central"),
    ("Jajpur", "JJP", "Central"),
    ("Jharsuguda", "JSG", "Northern"),
    ("Kalahandi", "KLH", "Southern"),
    ("Kandhamal", "KDM", "Southern"),
    ("Kendrapara", "KDP", "Central"),
    ("Kendujhar", "KJR", "Northern"),
    ("Khordha", "KHD", "Central"),
    ("Koraput", "KPT", "Southern"),
    ("Malkangiri", "MKG", "Southern"),
    ("Mayurbhanj", "MBJ", "Central"),
    ("Nabarangpur", "NBP", "Southern"),
    ("Nayagarh", "NYG", "Central"),
    ("Nuapada", "NPD", "Southern"),
    ("Puri", "PRI", "Central"),
    ("Rayagada", "RGD", "Southern"),
    ("Sambalpur", "SBP", "Northern"),
    ("Subarnapur", "SNP", "Southern"),
    ("Sundargarh", "SDG", "Northern"),
]

ODISHA_DISTRICT_NAMES = [name for name, _, _ in ODISHA_DISTRICTS]

DEPARTMENTS = [
    ("Home Department", "Civil defence policy and state-level coordination"),
    ("Fire & Emergency Services", "Fire response and rescue operations"),
    ("Odisha State Disaster Management Authority", "Cyclone, flood and disaster preparedness"),
    ("Health & Family Welfare", "First aid, medical camps and triage training"),
]
