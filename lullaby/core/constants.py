"""Age-based sleep guidelines and prediction tuning constants.

Every age table is an ordered list of (max_age_days, value) pairs. The first
row whose max_age_days >= age wins; ages past the last row use the table's
*_OLDER value and an unknown age uses the table's *_UNKNOWN value.
"""

# ── AGE BUCKETS ──────────────────────────────────────────────────────────────
# Boundaries in days: newborn week, first month, 3m, 6m, 9m, 12m, 18m.
NEWBORN_DAYS = 7
FIRST_MONTH_DAYS = 28
THREE_MONTHS_DAYS = 90
SIX_MONTHS_DAYS = 180
NINE_MONTHS_DAYS = 270
TWELVE_MONTHS_DAYS = 365
EIGHTEEN_MONTHS_DAYS = 547

DAYS_PER_WEEK = 7


# ── SLEEP ONSET INTERVAL (hours between consecutive sleep starts) ────────────
# Clinical heuristic: typical nap length + wake window for the age group.
# No single source prescribes these values; they are rounded so that
# interval - 0.5h lands inside the usual wake-window guidance.
SLEEP_INTERVAL_HOURS = [
    (NEWBORN_DAYS, 2.5),
    (FIRST_MONTH_DAYS, 3.0),
    (THREE_MONTHS_DAYS, 3.0),
    (SIX_MONTHS_DAYS, 3.5),
    (NINE_MONTHS_DAYS, 4.0),
    (TWELVE_MONTHS_DAYS, 4.5),
    (EIGHTEEN_MONTHS_DAYS, 5.5),
]
SLEEP_INTERVAL_HOURS_OLDER = 6.0
SLEEP_INTERVAL_HOURS_UNKNOWN = 3.0

# Wake window = onset interval minus a half-hour settling buffer.
WAKE_WINDOW_SETTLING_HOURS = 0.5
WAKE_WINDOW_MINUTES_UNKNOWN = 90


# ── WAKE TIME / BEDTIME RANGES (decimal hours: early, typical, late) ────────
# Clinical heuristics. No cited source gives clock-time ranges per age group,
# values follow common pediatric guidance (morning 6-8am, bedtime 7-9pm,
# later bedtimes for young infants who have not consolidated night sleep).
WAKE_TIME_RANGES = [
    (THREE_MONTHS_DAYS, (5.0, 6.5, 8.0)),
    (SIX_MONTHS_DAYS, (5.5, 6.5, 7.5)),
    (TWELVE_MONTHS_DAYS, (6.0, 6.5, 7.5)),
]
WAKE_TIME_RANGE_OLDER = (6.0, 6.5, 7.5)
WAKE_TIME_RANGE_UNKNOWN = (5.0, 6.5, 8.0)

BEDTIME_RANGES = [
    (THREE_MONTHS_DAYS, (20.0, 21.5, 23.0)),
    (SIX_MONTHS_DAYS, (19.0, 20.0, 21.0)),
    (TWELVE_MONTHS_DAYS, (18.0, 19.0, 20.0)),
]
BEDTIME_RANGE_OLDER = (18.0, 19.0, 20.0)
BEDTIME_RANGE_UNKNOWN = (18.0, 19.5, 21.0)


# ── NAPS ─────────────────────────────────────────────────────────────────────
NAP_COUNTS = [
    (THREE_MONTHS_DAYS, 4),
    (SIX_MONTHS_DAYS, 3),
    (TWELVE_MONTHS_DAYS, 2),
]
NAP_COUNT_OLDER = 1
NAP_COUNT_UNKNOWN = 3

# (longer nap, shorter nap) in minutes. Earlier naps run longer.
NAP_DURATION_MINUTES = [
    (THREE_MONTHS_DAYS, (120, 60)),
    (SIX_MONTHS_DAYS, (120, 90)),
    (TWELVE_MONTHS_DAYS, (120, 90)),
]
NAP_DURATION_MINUTES_OLDER = (120, 120)
NAP_DURATION_MINUTES_UNKNOWN = 90


# ── TOTAL DAILY SLEEP (hours) ────────────────────────────────────────────────
# Midpoints of NSF recommended ranges (newborn 14-17h, infant 12-15h,
# toddler 11-14h), rounded to whole hours.
DAILY_SLEEP_GOAL_HOURS = [
    (NEWBORN_DAYS, 16),
    (FIRST_MONTH_DAYS, 15),
    (THREE_MONTHS_DAYS, 15),
    (SIX_MONTHS_DAYS, 14),
    (NINE_MONTHS_DAYS, 13),
    (TWELVE_MONTHS_DAYS, 13),
    (EIGHTEEN_MONTHS_DAYS, 12),
]
DAILY_SLEEP_GOAL_HOURS_OLDER = 11
DAILY_SLEEP_GOAL_HOURS_UNKNOWN = 15

# Assumed average night sleep when deriving the daytime budget.
EXPECTED_NIGHT_SLEEP_HOURS = 10


# ── SLEEP GUIDANCE MESSAGES ─────────────────────────────────────────────────
SLEEP_GUIDANCE = [
    (NEWBORN_DAYS, "Newborns sleep in short stretches around the clock. Expect a new sleep every 2-3 hours."),
    (FIRST_MONTH_DAYS, "In the first month most babies can only stay awake for about an hour before needing sleep."),
    (THREE_MONTHS_DAYS, "Watch for sleepy cues - babies this age usually need a nap every 2.5-3 hours."),
    (SIX_MONTHS_DAYS, "Naps are consolidating. Most babies this age take about 3 naps a day."),
    (NINE_MONTHS_DAYS, "Many babies move toward 2-3 naps with longer wake windows around now."),
    (TWELVE_MONTHS_DAYS, "Two naps a day is typical. Keep the last wake window before bed the longest."),
    (EIGHTEEN_MONTHS_DAYS, "Toddlers often transition to a single midday nap between 12 and 18 months."),
]
SLEEP_GUIDANCE_OLDER = "One midday nap and a consistent bedtime routine work best for most toddlers."
SLEEP_GUIDANCE_UNKNOWN = "Follow your pediatrician's sleep recommendations."


# ── OVERDUE THRESHOLDS (minutes past prediction) ────────────────────────────
# No clinical source, app-level UX tuning. Sleep schedules are variable so the
# threshold grows as patterns become established.
SLEEP_OVERDUE_THRESHOLDS = [
    (7, 20),
    (14, 25),
    (30, 30),
    (60, 40),
    (90, 50),
]
SLEEP_OVERDUE_THRESHOLD_OLDER = 60
SOON_WINDOW_MAX_MINUTES = 30


# ── NEXT-SLEEP PREDICTION ────────────────────────────────────────────────────
# No clinical source, app-level statistical tuning.
PREDICTION_MAX_SESSIONS = 10
PREDICTION_PATTERN_SIZE = 5
MAX_VALID_INTERVAL_HOURS = 24.0

HIGH_CONFIDENCE_MIN_INTERVALS = 3
# (age-based, average, last interval) weights
HIGH_CONFIDENCE_WEIGHTS = (0.4, 0.4, 0.2)
MEDIUM_CONFIDENCE_WEIGHTS = (0.5, 0.3, 0.2)

RECOVERY_INTERVAL_FACTOR = 0.6


# ── QUICK-LOG DURATION ──────────────────────────────────────────────────────
SUGGESTED_DURATION_MINUTES = [
    (THREE_MONTHS_DAYS, 45),
    (SIX_MONTHS_DAYS, 75),
    (TWELVE_MONTHS_DAYS, 90),
]
SUGGESTED_DURATION_MINUTES_OLDER = 105
SUGGESTED_DURATION_MINUTES_UNKNOWN = 60

MAX_REALISTIC_SLEEP_MINUTES = 480
DURATION_HIGH_SAMPLE_COUNT = 3
# (recent, age-based) weights
DURATION_HIGH_WEIGHTS = (0.6, 0.4)
DURATION_LOW_WEIGHTS = (0.4, 0.6)

QUICK_LOG_MIN_MINUTES = 10
QUICK_LOG_MAX_MINUTES = 480

# Hours [start, end) treated as daytime when classifying a new record.
NAP_HOURS_START = 6
NAP_HOURS_END = 18


# ── WAKE TIME / BEDTIME ANALYSIS ────────────────────────────────────────────
PATTERN_LOOKBACK_DAYS = 14
MODE_WEIGHT = 0.6
MEAN_WEIGHT = 0.4
PATTERN_HIGH_MIN_SAMPLES = 10
PATTERN_MEDIUM_MIN_SAMPLES = 5
PATTERN_HIGH_MAX_STD_HOURS = 1.5
PATTERN_MEDIUM_MAX_STD_HOURS = 2.5
TYPICAL_RANGE_HALF_WIDTH_HOURS = 1.5


# ── WAKE WINDOWS ────────────────────────────────────────────────────────────
WAKE_WINDOW_LOOKBACK_DAYS = 7
MAX_WAKE_WINDOW_MINUTES = 720
WAKE_WINDOW_HIGH_MIN_GAPS = 10
WAKE_WINDOW_MEDIUM_MIN_GAPS = 5
WAKE_WINDOW_HIGH_WEIGHT = 0.7
WAKE_WINDOW_MEDIUM_WEIGHT = 0.5
WAKE_WINDOW_LOW_WEIGHT = 0.3


# ── NIGHT SLEEP QUALITY ─────────────────────────────────────────────────────
# 4h² variance in bed/wake time scores 0; duration variance of half the mean
# duration scores 0.
MAX_CLOCK_TIME_VARIANCE = 4.0
MAX_DURATION_VARIANCE_FACTOR = 0.5
TREND_MIN_SAMPLES = 6
TREND_IMPROVING_THRESHOLD_PCT = 5.0
TREND_DECLINING_THRESHOLD_PCT = -5.0


# ── SLEEP STATS ─────────────────────────────────────────────────────────────
STATS_COMPARISON_HOURS = 24
STATS_TREND_DAYS = 7
UPCOMING_SLEEP_LOOKBACK_HOURS = 72
