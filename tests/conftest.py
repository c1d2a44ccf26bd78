"""Shared fixtures for schedule tests."""
import pytest

SAMPLE_SCHEDULE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!-- generated by pentabarf -->
<schedule>
  <generator name="pretalx" version="2025.1.0"/>
  <version>Sunday</version>
  <conference>
    <acronym>fosdem2025</acronym>
    <title>FOSDEM 2025</title>
    <subtitle/>
    <venue>ULB (Universite Libre de Bruxelles)</venue>
    <city>Brussels</city>
    <start>2025-02-01</start>
    <end>2025-02-02</end>
    <days>2</days>
    <day_change>09:00:00</day_change>
    <timeslot_duration>00:05:00</timeslot_duration>
    <time_zone_name>Europe/Brussels</time_zone_name>
  </conference>
  <day index="1" date="2025-02-01" start="2025-02-01T09:00:00+01:00" end="2025-02-01T19:00:00+01:00">
    <room name="Janson" slug="janson">
      <event guid="a1" id="1001">
        <start>09:30</start>
        <duration>00:25</duration>
        <room>Janson</room>
        <url>https://fosdem.org/2025/schedule/event/welcome/</url>
        <title>Welcome to FOSDEM</title>
        <subtitle/>
        <track>Keynotes</track>
        <type>keynote</type>
        <language>en</language>
        <abstract>Opening words</abstract>
        <description/>
        <feedback_url>https://fosdem.org/2025/feedback/1001</feedback_url>
        <persons>
          <person id="1">Alice</person>
          <person id="2">Bob</person>
        </persons>
        <attachments/>
        <links>
          <link href="https://video.fosdem.org/2025/janson/welcome.mp4">Video recording (mp4)</link>
          <link href="https://fosdem.org/">Homepage</link>
        </links>
      </event>
      <event guid="a2" id="1002">
        <start>10:00</start>
        <duration>00:50</duration>
        <title>Session canceled</title>
        <track>Keynotes</track>
        <type>keynote</type>
      </event>
    </room>
    <room name="H.1301 (Cornil)" slug="h1301">
      <event guid="b1" id="2001">
        <start>11:00</start>
        <duration>00:30</duration>
        <title>Profiling Go programs</title>
        <track>Go  Performance</track>
        <type>devroom</type>
        <persons>
          <person id="3">Carol</person>
        </persons>
      </event>
      <event guid="b2" id="2002">
        <start>11:30</start>
        <duration>00:30</duration>
        <title>AMENDMENT Escape analysis</title>
        <track>Go  Performance</track>
        <type>devroom</type>
      </event>
    </room>
    <room name="K.3.401" slug="k3401">
      <event guid="c1" id="3001">
        <start>09:00</start>
        <duration>08:00</duration>
        <title>Sponsor booth</title>
        <track>stand</track>
        <type>other</type>
      </event>
    </room>
  </day>
  <day index="2" date="2025-02-02" start="2025-02-02T09:00:00+01:00" end="2025-02-02T17:00:00+01:00">
    <room name="H.1301 (Cornil)" slug="h1301-day2">
      <event guid="b3" id="2003">
        <start>10:00</start>
        <duration>00:30</duration>
        <title>Go in production</title>
        <track>go performance</track>
        <type>devroom</type>
      </event>
    </room>
    <room name="D.radio" slug="radio">
      <event guid="d1" id="4001">
        <start>12:00</start>
        <duration>01:00</duration>
        <title>Community radio</title>
        <track>Radio</track>
        <type>maintrack</type>
      </event>
    </room>
    <room name="UB2.252A (Lameere)" slug="ub2252a">
      <event guid="e1" id="5001">
        <start>14:00</start>
        <duration>00:15</duration>
        <title>Lightning intro</title>
        <track>Lightning Talks</track>
        <type>lightning</type>
        <attachments>
          <attachment type="slides" href="https://fosdem.org/2025/slides/intro.pdf">Slides</attachment>
        </attachments>
      </event>
      <event guid="e2" id="5002">
        <start>14:15</start>
        <duration>00:15</duration>
        <track>Lightning Talks</track>
        <type>lightning</type>
      </event>
    </room>
  </day>
</schedule>
"""


@pytest.fixture
def sample_schedule_xml():
    """Schedule document covering two days and the main business rules."""
    return SAMPLE_SCHEDULE_XML
