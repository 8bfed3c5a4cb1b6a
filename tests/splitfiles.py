"""Small split files of every supported format, built in memory."""
import json
import struct


def java_string(s):
    if s is None:
        return b"\x70"
    raw = s.encode("utf-8")
    return b"\x74" + struct.pack(">H", len(raw)) + raw


def java_millis(ms):
    if ms is None:
        return b"\x70"
    return b"\x73" + struct.pack(">q", ms)


def llanfair_bytes(title, segments, attempts=0, delay_ms=0, goal=None,
                   class_name="org.fenix.llanfair.Run", count=None):
    """segments: [(name, best_ms, time_ms), ...]"""
    cls = class_name.encode("utf-8")
    out = b"\xac\xed\x00\x05" + b"\x73\x72" + struct.pack(">H", len(cls)) + cls + b"\x00" * 8
    out += java_string(title) + java_string(goal)
    out += struct.pack(">i", attempts) + struct.pack(">q", delay_ms)
    out += struct.pack(">i", len(segments) if count is None else count)
    for name, best, time in segments:
        out += b"\x73" + java_string(name) + java_millis(best) + java_millis(time)
    return out


LLANFAIR = llanfair_bytes(
    "Mega Man 2 Any%",
    [("Heat Man", 40000, 42500), ("Air Man", 35250, 36000), ("Wily 1", None, 61000)],
    attempts=17,
    delay_ms=1500,
)

# decodes when names are skipped, fails once they are read
LLANFAIR_BAD_NAME = llanfair_bytes("Broken", [("@@", 1000, 1000)]).replace(b"@@", b"\xff\xfe")

URN = json.dumps({
    "title": "Celeste Any%",
    "attempt_count": 12,
    "start_delay": "1.000000",
    "splits": [
        {"title": "Prologue", "time": "0:00:12.500000", "best_time": "0:00:12.000000",
         "best_segment": "0:00:12.000000"},
        {"title": "City", "time": "0:00:19.750000", "best_time": "", "best_segment": ""},
    ],
}, indent=4).encode("utf-8")

LIVESPLIT = b"""<?xml version="1.0" encoding="UTF-8"?>
<Run version="1.7.0">
  <GameIcon />
  <GameName>Super Metroid</GameName>
  <CategoryName>Any%</CategoryName>
  <Metadata>
    <Run id="z5l3x1ey" />
    <Platform usesEmulator="False">SNES</Platform>
  </Metadata>
  <Offset>-00:00:01.5000000</Offset>
  <AttemptCount>42</AttemptCount>
  <AttemptHistory>
    <Attempt id="1" started="01/01/2016 10:00:00" ended="01/01/2016 10:02:00">
      <RealTime>00:02:00</RealTime>
    </Attempt>
    <Attempt id="2" started="01/02/2016 10:00:00" ended="01/02/2016 10:00:30" />
  </AttemptHistory>
  <Segments>
    <Segment>
      <Name>Ceres</Name>
      <Icon />
      <SplitTimes>
        <SplitTime name="Personal Best">
          <RealTime>00:01:00.5000000</RealTime>
          <GameTime>00:00:58.0000000</GameTime>
        </SplitTime>
      </SplitTimes>
      <BestSegmentTime>
        <RealTime>00:00:59.2500000</RealTime>
        <GameTime>00:00:57.0000000</GameTime>
      </BestSegmentTime>
      <SegmentHistory>
        <Time id="1">
          <RealTime>00:01:01</RealTime>
        </Time>
        <Time id="2">
          <RealTime>00:01:00.5000000</RealTime>
        </Time>
      </SegmentHistory>
    </Segment>
    <Segment>
      <Name>Brinstar</Name>
      <Icon />
      <SplitTimes>
        <SplitTime name="Personal Best">
          <RealTime>00:02:30.7500000</RealTime>
        </SplitTime>
      </SplitTimes>
      <BestSegmentTime>
        <RealTime>00:01:25</RealTime>
      </BestSegmentTime>
      <SegmentHistory />
    </Segment>
  </Segments>
</Run>
"""

SPLITTERZ = "Super Mario‡ 64,5\nBob-omb,0:01:30.00,1:28.50\nWhomp,3:10.25,0\n".encode("utf-8")

TIMESPLITTRACKER = b"7\t0.5\nZelda\t\nSword\t74.38\t70.1\nDungeon\t150.5\t0\n"

WSPLIT = (
    b"Title=SM64, 16 Star\n"
    b"Attempts=23\n"
    b"Offset=500\n"
    b"Size=152,25\n"
    b"Lobby, BLJ,0,84.5,81.3\n"
    b"Bowser,0,170.2,80\n"
    b'Icons="",""\n'
)

GARBAGE = b"\x00\x01\x02 this is not a split file \xff\xfe"
