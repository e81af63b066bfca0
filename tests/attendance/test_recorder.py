import threading
from datetime import datetime, time, timedelta

import pytest

from src.rfid_attendance.rfid_attendance.core.enums import AttendanceStatus, Direction, Role
from src.rfid_attendance.rfid_attendance.core.exceptions import (
    AmbiguousSchedule,
    DuplicateDirection,
    InvalidBadgeFormat,
    NoScheduleToday,
    PersistenceFailure,
    TooSoon,
    UnknownBadge,
    UnknownClassroom,
)
from src.rfid_attendance.rfid_attendance.schedules.model import Schedule

BADGE = "1234567890"


def at(hour, minute, second=0):
    return datetime(2026, 2, 2, hour, minute, second)


def test_on_time_check_in_writes_one_log_and_only_admin_action_notices(world):
    result = world.recorder.record_scan(BADGE, 1, now=at(8, 5))

    assert result.direction == Direction.IN
    assert result.status == AttendanceStatus.ON_TIME
    assert result.schedule.schedule_id == 10
    assert len(world.attendance.logs) == 1
    assert world.attendance.logs[0].scan_time == time(8, 5)

    assert world.notifications.for_role(Role.TEACHER) == []
    admin_notices = world.notifications.for_role(Role.ADMIN)
    assert [n["user_id"] for n in admin_notices] == [100, 101]
    assert admin_notices[0]["template"].message == "Maria Santos Checked In - on_time at Room 101 at 8:05 AM"


def test_late_check_in_notifies_the_teacher(world):
    result = world.recorder.record_scan(BADGE, 1, now=at(8, 12))

    assert result.status == AttendanceStatus.LATE
    assert result.note == "Late by 12 minutes"

    teacher_notices = world.notifications.for_role(Role.TEACHER)
    assert len(teacher_notices) == 1
    notice = teacher_notices[0]
    assert notice["user_id"] == 1
    assert notice["template"].title == "Attendance Irregularity"
    assert notice["template"].message == (
        "Maria Santos arrived late to Room 101 class scheduled for 8:00 AM on 2026-02-02."
    )


def test_check_in_at_grace_boundary_is_on_time(world):
    assert world.recorder.record_scan(BADGE, 1, now=at(8, 10, 45)).status == AttendanceStatus.ON_TIME


def test_padded_badge_is_rejected_before_lookup(world):
    with pytest.raises(InvalidBadgeFormat):
        world.recorder.record_scan(f" {BADGE}\n", 1, now=at(8, 5))

    assert world.teachers.rfid_lookups == 0
    assert world.attendance.logs == []


def test_second_scan_is_check_out_and_third_is_rejected(world):
    world.recorder.record_scan(BADGE, 1, now=at(8, 5))
    out = world.recorder.record_scan(BADGE, 1, now=at(9, 35))

    assert out.direction == Direction.OUT
    assert out.status == AttendanceStatus.ON_TIME

    with pytest.raises(DuplicateDirection):
        world.recorder.record_scan(BADGE, 1, now=at(9, 40))
    assert len(world.attendance.logs) == 2


def test_early_check_out_notifies_the_teacher(world):
    world.recorder.record_scan(BADGE, 1, now=at(8, 5))
    out = world.recorder.record_scan(BADGE, 1, now=at(9, 0))

    assert out.status == AttendanceStatus.EARLY_LEAVE
    messages = [n["template"].message for n in world.notifications.for_role(Role.TEACHER)]
    assert messages == ["Maria Santos left early from Room 101 class scheduled for 8:00 AM on 2026-02-02."]


def test_scans_30_seconds_apart_are_rate_limited(world):
    first = at(8, 5)
    world.recorder.record_scan(BADGE, 1, now=first)

    with pytest.raises(TooSoon) as exc:
        world.recorder.record_scan(BADGE, 1, now=first + timedelta(seconds=30))

    assert exc.value.code == "too_soon"
    assert "60 seconds" in str(exc.value)
    assert len(world.attendance.logs) == 1


def test_scan_61_seconds_later_checks_out(world):
    first = at(8, 5)
    world.recorder.record_scan(BADGE, 1, now=first)

    result = world.recorder.record_scan(BADGE, 1, now=first + timedelta(seconds=61))

    assert result.direction == Direction.OUT
    assert result.status == AttendanceStatus.EARLY_LEAVE


def test_rate_limit_applies_before_duplicate_check(world):
    world.attendance.add(scan_type=Direction.IN, status=AttendanceStatus.ON_TIME, created_at=at(8, 0))
    world.attendance.add(scan_type=Direction.OUT, status=AttendanceStatus.ON_TIME, created_at=at(9, 30))

    with pytest.raises(TooSoon):
        world.recorder.record_scan(BADGE, 1, now=at(9, 30, 20))


def test_logs_written_by_another_terminal_count_for_direction(world):
    world.attendance.add(scan_type=Direction.IN, status=AttendanceStatus.ON_TIME, created_at=at(8, 1))

    assert world.recorder.record_scan(BADGE, 1, now=at(9, 31)).direction == Direction.OUT


def test_malformed_badge_is_rejected_before_lookup(world):
    with pytest.raises(InvalidBadgeFormat):
        world.recorder.record_scan("12345", 1, now=at(8, 5))

    assert world.teachers.rfid_lookups == 0
    assert world.attendance.logs == []


@pytest.mark.parametrize("badge", ["", "12345678901", "12345abcde", "１２３４５６７８９０"])
def test_other_malformed_badges(world, badge):
    with pytest.raises(InvalidBadgeFormat):
        world.recorder.record_scan(badge, 1, now=at(8, 5))


def test_unknown_badge_is_rejected(world):
    with pytest.raises(UnknownBadge) as exc:
        world.recorder.record_scan("1234567899", 1, now=at(8, 5))

    assert str(exc.value) == "RFID card not recognized. Please register this card first."
    assert world.attendance.logs == []


def test_unknown_classroom_is_rejected(world):
    with pytest.raises(UnknownClassroom):
        world.recorder.record_scan(BADGE, 99, now=at(8, 5))


def test_no_schedule_on_another_day(world):
    tuesday = datetime(2026, 2, 3, 8, 5)
    with pytest.raises(NoScheduleToday):
        world.recorder.record_scan(BADGE, 1, now=tuesday)

    assert world.attendance.logs == []


def _two_classes():
    return [
        Schedule(11, 1, 1, 1, time(13, 0), time(14, 0), 5, "Science"),
        Schedule(10, 1, 1, 1, time(8, 0), time(9, 30), 10, "Mathematics"),
    ]


def _clashing():
    return [
        Schedule(11, 1, 1, 1, time(9, 0), time(10, 0), 5, "Science"),
        Schedule(10, 1, 1, 1, time(8, 0), time(9, 30), 10, "Mathematics"),
    ]


def test_separate_classes_in_one_room_are_accepted_in_strict_mode(make_world):
    world = make_world(schedules=_two_classes(), strict_schedule_match=True)

    assert world.recorder.record_scan(BADGE, 1, now=at(8, 5)).schedule.schedule_id == 10


def test_overlapping_schedules_use_the_earliest(make_world):
    world = make_world(schedules=_clashing())

    assert world.recorder.record_scan(BADGE, 1, now=at(8, 5)).schedule.schedule_id == 10


def test_overlapping_schedules_rejected_in_strict_mode(make_world):
    world = make_world(schedules=_clashing(), strict_schedule_match=True)

    with pytest.raises(AmbiguousSchedule):
        world.recorder.record_scan(BADGE, 1, now=at(8, 5))


def test_storage_failure_records_nothing_and_sends_nothing(world):
    world.attendance.fail_writes = True

    with pytest.raises(PersistenceFailure):
        world.recorder.record_scan(BADGE, 1, now=at(8, 12))

    assert world.attendance.logs == []
    assert world.notifications.created == []


def test_notification_failure_does_not_fail_the_scan(world):
    world.notifications.fail = True

    result = world.recorder.record_scan(BADGE, 1, now=at(8, 12))

    assert result.status == AttendanceStatus.LATE
    assert len(world.attendance.logs) == 1


def test_admin_lookup_failure_still_notifies_the_teacher(make_world):
    world = make_world(notify_admins_on_irregularity=True)
    world.admins.broken = True

    world.recorder.record_scan(BADGE, 1, now=at(8, 12))

    assert len(world.notifications.for_role(Role.TEACHER)) == 1
    assert world.notifications.for_role(Role.ADMIN) == []


def test_admins_get_late_alert_when_enabled(make_world):
    world = make_world(notify_admins_on_irregularity=True)

    world.recorder.record_scan(BADGE, 1, now=at(8, 12))

    titles = [n["template"].title for n in world.notifications.for_role(Role.ADMIN)]
    assert titles.count("Late Arrival Alert") == 2
    assert titles.count("👨‍🏫 Teacher Action: Checked In") == 2


def test_configured_rate_limit_window(make_world):
    world = make_world(rate_limit_seconds=5)
    world.recorder.record_scan(BADGE, 1, now=at(8, 5))

    assert world.recorder.record_scan(BADGE, 1, now=at(8, 5, 10)).direction == Direction.OUT


def test_uses_injected_clock_when_now_is_omitted(world):
    world.clock.now = at(8, 20)

    result = world.recorder.record_scan(BADGE, 1)

    assert result.status == AttendanceStatus.LATE
    assert result.log.created_at == at(8, 20)


def test_concurrent_scans_for_one_pair_write_a_single_log(world):
    workers = 8
    barrier = threading.Barrier(workers)
    recorded, too_soon, other = [], [], []

    def scan():
        barrier.wait()
        try:
            recorded.append(world.recorder.record_scan(BADGE, 1, now=at(8, 5)))
        except TooSoon as e:
            too_soon.append(e)
        except Exception as e:
            other.append(e)

    threads = [threading.Thread(target=scan) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert other == []
    assert len(recorded) == 1
    assert len(too_soon) == workers - 1
    assert len(world.attendance.logs) == 1


def test_rate_limit_spans_midnight(make_world):
    late_night = Schedule(12, 1, 1, 2, time(0, 0), time(1, 0), 10, "Night class")
    world = make_world(schedules=[Schedule(10, 1, 1, 1, time(8, 0), time(9, 30), 10), late_night])
    world.recorder.record_scan(BADGE, 1, now=at(23, 59, 40))

    with pytest.raises(TooSoon) as exc:
        world.recorder.record_scan(BADGE, 1, now=datetime(2026, 2, 3, 0, 0, 10))
    assert exc.value.retry_after_seconds == 30

    result = world.recorder.record_scan(BADGE, 1, now=datetime(2026, 2, 3, 0, 0, 45))
    assert result.direction == Direction.IN
    assert result.schedule.schedule_id == 12
