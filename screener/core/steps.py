# Step identifiers persisted in Session.step.
# Order is defined by the catalog in use; COMPLETED is the only terminal value.

# Are you applying as a team member (not a marketplace tutor)?
Q1_TEAM_ROLE = "q1_team_role"

# Weekly availability, compared against MIN_WEEKLY_HOURS
Q2_WEEKLY_HOURS = "q2_weekly_hours"

# Earliest start date (informational only)
Q3_START_DATE = "q3_start_date"

# Stable internet + quiet teaching space
Q4_SETUP = "q4_setup"

# Willingness to follow curriculum and SOPs
Q5_SOP = "q5_sop"

# Extended variant only
Q6_ENGLISH_LEVEL = "q6_english_level"
Q7_AGE = "q7_age"  # free text
Q8_STUDENT_TYPES = "q8_student_types"

# Terminal: verdict reached, session scheduled for deletion
COMPLETED = "completed"

# Verdicts
PASS = "pass"
FAIL = "fail"
