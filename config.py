# config.py

"""
Program-wide settings for the roster tracker.

Column labels, storage keys, and paging defaults are shared by the CSV codec,
the roster store, the view pipeline, and the CLI.
"""

# --- CSV column labels ---
# order matters: the landmark column must stay last (see csv_codec overflow rule)
HEADER_TIMESTAMP = "طابع زمني"
HEADER_FULL_NAME = "اسم الطالب رباعي"
HEADER_STUDENT_ID = "رقم الهوية الطالب"
HEADER_GENDER = "جنس الطالب"
HEADER_GRADE = "الطالب في الصف"
HEADER_MOBILE = "رقم الموبايل"
HEADER_HAS_SIBLINGS = "هل له اخوة في نفس المركز؟"
HEADER_NEAREST_LANDMARK = "ماهو أقرب معلم؟"

CSV_HEADERS = [
    HEADER_TIMESTAMP,
    HEADER_FULL_NAME,
    HEADER_STUDENT_ID,
    HEADER_GENDER,
    HEADER_GRADE,
    HEADER_MOBILE,
    HEADER_HAS_SIBLINGS,
    HEADER_NEAREST_LANDMARK,
]

# export only, formatted with the selected date
ATTENDANCE_HEADER_TEMPLATE = "حالة الحضور ({date})"

CSV_BOM = "﻿"

EXPORT_FILENAME_SUFFIX = "students_registrations.csv"

# --- view pipeline ---
PAGE_SIZE = 50

# --- storage keys ---
STORAGE_KEY_STUDENTS = "students"
SESSION_KEY_AUTHENTICATED = "isAuthenticated"
SESSION_KEY_ROLE = "role"

LOCAL_STORAGE_FILENAME = "local_storage.json"
LOG_FILENAME = "roster.log"

# --- data directory ---
DATA_DIR_ENV_VAR = "ROSTER_DATA_DIR"
DEFAULT_DATA_DIR = "~/Documents/Rosters"

# --- seed data, used when storage holds no roster ---
SEED_CSV = "\n".join(
    [
        ",".join(CSV_HEADERS),
        '2024/09/01 9:15:02 ص,أحمد محمد علي حسن,401234567,ذكر,الاول,0599123456,نعم,"مسجد النور, الشارع الرئيسي"',
        "2024/09/01 9:20:40 ص,سارة محمد علي حسن,401234568,انثى,الثالث,059-912-3456,نعم,مسجد النور",
        "2024/09/01 10:02:11 ص,يوسف خالد عمر سالم,402345678,ذكر,السابغ,0598765432,لا,دوار المدينة",
        "2024/09/02 8:45:30 ص,ليان سامي يوسف عبد الله,403456789,انثى,الخامس,0597654321,لا,مدرسة البنات",
        "2024/09/02 11:10:05 ص,عمر ياسر محمود صالح,404567890,ذكر,العاشر,0596543210,لا,السوق القديم",
    ]
)
