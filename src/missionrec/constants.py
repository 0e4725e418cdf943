"""Shared constants and defaults."""

APP_NAME = "missionrec"
DATA_DIR_ENV = "MISSIONREC_DATA_DIR"

RECORDS_SUBDIR = "mission_records"

MP4_FILENAME = "video.mp4"
OBSERVATIONS_FILENAME = "observations.txt"
REWARDS_FILENAME = "rewards.txt"
COMMANDS_FILENAME = "commands.txt"
MISSION_INIT_FILENAME = "missionInit.xml"

DEFAULT_MP4_FPS = 20
DEFAULT_MP4_BIT_RATE = 400000
DEFAULT_COMPRESS_LEVEL = 9
