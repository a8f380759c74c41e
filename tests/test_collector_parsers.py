"""
Contract test for collector parsing of platform tool output
"""

from machine_report.collectors.cpu import _parse_cpuinfo_ghz, _parse_lscpu
from machine_report.collectors.disk import classify_zpool_status, _zfs_mounted
from machine_report.collectors.login import NEVER_LOGGED_IN, _parse_lastlog
from machine_report.collectors.memory import _parse_meminfo, _parse_vm_stat_available
from machine_report.collectors.network import (
    _parse_ifconfig,
    _parse_ip_addr,
    _parse_resolv_conf,
    client_ip_from_env,
    pick_machine_ip,
)
from machine_report.collectors.os_info import _parse_os_release, format_os_name
from machine_report.collectors.uptime import _parse_boottime, _parse_proc_uptime, format_uptime


def test_os_release_name() -> None:
    contents = "\n".join(
        [
            'PRETTY_NAME="Debian GNU/Linux 13 (trixie)"',
            "ID=debian",
            'VERSION="13 (trixie)"',
            "VERSION_CODENAME=trixie",
        ]
    )

    assert format_os_name(_parse_os_release(contents)) == "Debian 13 (trixie) Trixie"


def test_os_release_missing_codename() -> None:
    assert format_os_name({"ID": "alpine"}) == "Alpine"


def test_ip_addr_skips_loopback_and_docker() -> None:
    output = "\n".join(
        [
            "1: lo    inet 127.0.0.1/8 scope host lo\\       valid_lft forever",
            "3: docker0    inet 172.17.0.1/16 brd 172.17.255.255 scope global docker0",
            "2: eth0    inet6 fe80::1/64 scope link \\       valid_lft forever",
            "2: eth0    inet 10.0.0.5/24 brd 10.0.0.255 scope global eth0",
        ]
    )

    assert pick_machine_ip(_parse_ip_addr(output)) == "10.0.0.5"


def test_ip_falls_back_to_ipv6() -> None:
    output = "2: eth0    inet6 2001:db8::5/64 scope global \\       valid_lft forever"

    assert pick_machine_ip(_parse_ip_addr(output)) == "2001:db8::5"


def test_ifconfig_blocks() -> None:
    output = "\n".join(
        [
            "lo0: flags=8049<UP,LOOPBACK,RUNNING,MULTICAST> mtu 16384",
            "\tinet 127.0.0.1 netmask 0xff000000",
            "en0: flags=8863<UP,BROADCAST,SMART,RUNNING> mtu 1500",
            "\tinet6 fe80::1%en0 prefixlen 64 scopeid 0x4",
            "\tinet 192.168.1.20 netmask 0xffffff00 broadcast 192.168.1.255",
        ]
    )

    assert pick_machine_ip(_parse_ifconfig(output)) == "192.168.1.20"


def test_no_addresses() -> None:
    assert pick_machine_ip([]) is None


def test_client_ip_from_ssh_env() -> None:
    assert client_ip_from_env({"SSH_CLIENT": "203.0.113.9 51234 22"}) == "203.0.113.9"
    assert client_ip_from_env({"SSH_CONNECTION": "203.0.113.7 5 10.0.0.5 22"}) == "203.0.113.7"
    assert client_ip_from_env({}) == "Not connected"


def test_resolv_conf_ipv4_only() -> None:
    contents = "\n".join(
        [
            "# generated",
            "search example.net",
            "nameserver 1.1.1.1",
            "nameserver 2606:4700:4700::1111",
            "nameserver 9.9.9.9",
        ]
    )

    assert _parse_resolv_conf(contents) == ("1.1.1.1", "9.9.9.9")


def test_lscpu_fields() -> None:
    output = "\n".join(
        [
            "Architecture:            x86_64",
            "CPU(s):                  8",
            "Model name:              Intel(R) Xeon(R) CPU E5-2680 v4 @ 2.40GHz",
            "BIOS Model name:         pc-i440fx",
            "Core(s) per socket:      4",
            "Socket(s):               2",
            "Hypervisor vendor:       KVM",
        ]
    )

    fields = _parse_lscpu(output)

    assert fields["model"] == "Intel(R) Xeon(R) CPU E5-2680"
    assert fields["cores"] == "8"
    assert fields["cores_per_socket"] == "4"
    assert fields["sockets"] == "2"
    assert fields["hypervisor"] == "KVM"


def test_cpuinfo_frequency() -> None:
    assert _parse_cpuinfo_ghz("processor\t: 0\ncpu MHz\t\t: 3400.000\n") == 3.4
    assert _parse_cpuinfo_ghz("processor\t: 0\n") is None


def test_meminfo_bytes() -> None:
    values = _parse_meminfo("MemTotal:       16384 kB\nMemAvailable:    4096 kB\nbogus\n")

    assert values["MemTotal"] == 16384 * 1024
    assert values["MemAvailable"] == 4096 * 1024


def test_vm_stat_available() -> None:
    output = "\n".join(
        [
            "Mach Virtual Memory Statistics: (page size of 16384 bytes)",
            "Pages free:                               100.",
            "Pages active:                            5000.",
            "Pages inactive:                           200.",
            "Pages speculative:                         10.",
        ]
    )

    assert _parse_vm_stat_available(output) == 310 * 16384


def test_zpool_status() -> None:
    assert classify_zpool_status("all pools are healthy") == "HEALTH O.K."
    assert classify_zpool_status("pool 'zroot' is healthy") == "HEALTH O.K."
    assert classify_zpool_status("  pool: zroot") == "CHECK REQUIRED"
    assert classify_zpool_status("") == "Unknown"


def test_zfs_mount_detection() -> None:
    assert _zfs_mounted("zroot/ROOT/os / zfs rw,relatime 0 0\n")
    assert not _zfs_mounted("/dev/sda1 / ext4 rw 0 0\n")


def test_lastlog2_with_ip() -> None:
    output = "\n".join(
        [
            "Username         Port     From             Latest",
            "ops              pts/0    192.168.1.10     Mon Jan  6 10:15:32 +0000 2025",
        ]
    )

    result = _parse_lastlog(output)

    assert result.ip == "192.168.1.10"
    assert result.time == "Mon Jan 6 10:15:32 2025"


def test_lastlog_local_login() -> None:
    output = "\n".join(
        [
            "Username         Port     From             Latest",
            "ops              tty1                      Tue Feb  4 08:00:01 +0100 2025",
        ]
    )

    result = _parse_lastlog(output)

    assert result.ip is None
    assert result.time == "Tue Feb 4 08:00:01 2025"


def test_lastlog_never_logged_in() -> None:
    output = "Username         Port     From             Latest\nops                                         **Never logged in**\n"

    assert _parse_lastlog(output).time == NEVER_LOGGED_IN


def test_uptime_formatting() -> None:
    assert format_uptime(2 * 86400 + 3 * 3600) == "2d 3h"
    assert format_uptime(86400 + 60 * 5) == "1d 5m"
    assert format_uptime(59) == "0m"


def test_uptime_sources() -> None:
    assert _parse_proc_uptime("12345.67 54321.00\n") == 12345
    assert _parse_proc_uptime("") is None
    assert _parse_boottime("{ sec = 1700000000, usec = 12345 } Tue Nov 14 22:13:20 2023") == 1700000000
