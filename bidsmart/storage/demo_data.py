"""Seed projects shown until the first project is saved."""

from datetime import date
from typing import List

from bidsmart.schemas import BidProject

DEMO_PROJECTS: List[BidProject] = [
    BidProject(
        id="1",
        name="市政道路智慧交通监控系统",
        client="某市交通管理局",
        industry="智慧交通",
        budget="500-800万",
        deadline=date(2026, 3, 15),
        status="designing",
        source="crawled",
        requirements="建设覆盖全市主要道路的智慧交通监控系统，包含视频监控、流量分析、信号控制等模块。",
        created_at=date(2026, 2, 10),
        updated_at=date(2026, 2, 13),
    ),
    BidProject(
        id="2",
        name="产业园区综合能源管理平台",
        client="某经济开发区管委会",
        industry="能源管理",
        budget="300-500万",
        deadline=date(2026, 3, 1),
        status="quoting",
        source="crawled",
        requirements="建设园区综合能源管理平台，实现能耗监测、节能优化、碳排放管理等功能。",
        created_at=date(2026, 2, 5),
        updated_at=date(2026, 2, 12),
    ),
    BidProject(
        id="3",
        name="医院信息化升级改造项目",
        client="某三甲医院",
        industry="医疗信息化",
        budget="200-400万",
        deadline=date(2026, 4, 10),
        status="pending",
        source="crawled",
        requirements="HIS系统升级、电子病历系统建设、远程会诊平台搭建。",
        created_at=date(2026, 2, 14),
        updated_at=date(2026, 2, 14),
    ),
    BidProject(
        id="4",
        name="智慧校园安防系统建设",
        client="某大学",
        industry="智慧校园",
        budget="150-250万",
        deadline=date(2026, 2, 28),
        status="pending",
        source="crawled",
        requirements="校园安防监控系统、人脸识别门禁、访客管理系统建设。",
        created_at=date(2026, 2, 13),
        updated_at=date(2026, 2, 13),
    ),
    BidProject(
        id="5",
        name="水务集团SCADA系统",
        client="某水务集团",
        industry="水务",
        budget="400-600万",
        deadline=date(2026, 5, 1),
        status="submitted",
        source="manual",
        requirements="供水管网SCADA系统建设，含远程监控、压力调度、漏损检测等。",
        created_at=date(2026, 1, 20),
        updated_at=date(2026, 2, 11),
    ),
]
