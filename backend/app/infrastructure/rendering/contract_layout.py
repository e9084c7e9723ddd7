"""Fixed text layout of the transport service contract.

The layout is a pure function of the contract fields and the signing
date, so two renders of the same snapshot on the same day carry the same
sections in the same order.
"""

from datetime import date

from app.domain.entities import Contract

TITLE = "运输服务合同"
EMPTY_NOTES_PLACEHOLDER = "无"

ARTICLES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "第一条  合同目的",
        ("乙方确认遵守甲方的运营与安全规范，确保在提供运输服务期间遵守交通法规及公司制度。",),
    ),
    (
        "第二条  服务内容",
        (
            "1. 乙方须按照甲方派工安排执行运输任务；",
            "2. 行程开始前需检查车辆状态并确保证件齐全；",
            "3. 任务完成后向甲方汇报行程及异常情况。",
        ),
    ),
    (
        "第三条  费用结算与保密义务",
        ("乙方须严格保守甲方及客户信息，不得向第三方披露。费用结算方式以双方另行约定为准。",),
    ),
    (
        "第四条  安全责任",
        ("乙方需遵守安全驾驶原则，如遇突发事件应立即向甲方报告。因乙方违规导致的损失由乙方承担。",),
    ),
)

SIGNATURE_LINES: tuple[str, ...] = (
    "甲方代表（签名）：________________    日期：__________",
    "乙方（签名）：_______________________    日期：__________",
)


def format_signing_date(signed_on: date) -> str:
    return f"{signed_on.year:04d}年{signed_on.month:02d}月{signed_on.day:02d}日"


def build_contract_lines(contract: Contract, signed_on: date) -> list[str]:
    """Body lines below the title. Empty strings are paragraph breaks."""
    lines = [
        f"合同编号：{contract.id}",
        f"签署日期：{format_signing_date(signed_on)}",
        "",
        "甲方：__________________________",
        f"乙方（司机）：{contract.driver_name}",
        f"身份证号：{contract.id_number}",
        f"出生日期：{contract.birthday}",
        f"常驻城市：{contract.city}",
        f"服务地址：{contract.address}",
        "",
    ]
    for heading, paragraphs in ARTICLES:
        lines.append(heading)
        lines.extend(paragraphs)
        lines.append("")

    lines.append(f"备注：{contract.extra_notes or EMPTY_NOTES_PLACEHOLDER}")
    lines.append("")
    lines.extend(SIGNATURE_LINES)
    return lines
