from chipeight.timer import Timer


def test_new_timer_is_in_timeout():
    timer = Timer()
    assert timer.value == 0
    assert timer.in_timeout()


def test_tick_counts_down_to_zero_and_stops():
    timer = Timer()
    timer.value = 3
    for expected in (2, 1, 0, 0):
        timer.tick()
        assert timer.value == expected
    assert timer.in_timeout()


def test_not_in_timeout_while_running():
    timer = Timer(5)
    timer.tick()
    assert not timer.in_timeout()


def test_value_is_truncated_to_eight_bits():
    timer = Timer()
    timer.value = 0x1FF
    assert timer.value == 0xFF