"""
lcs.py — Longest Common Subsequence (bottom-up DP)
===================================================
Fills dp[0…m][0…n] cell by cell, then walks back from dp[m][n],
emitting one "trace-back" Step per visited cell, to recover the
subsequence itself.

Kinds: init, compare, match, no-match, trace-back,
complete (`lcs`, `length`, `path`).
"""

from typing import Any, Dict, Generator, List

from algorithms.step import Step, StepBuilder, Validation
from algorithms.validation import first_failure, require_keys, require_string_length

MAX_LENGTH = 10

PSEUDOCODE: List[str] = [
    "def lcs(a, b):",                                      # 0
    "    dp ← (m+1) × (n+1) zeros",                         # 1
    "    for i in 1 … m:",                                  # 2
    "        for j in 1 … n:",                              # 3
    "            if a[i-1] == b[j-1]:",                     # 4
    "                dp[i][j] ← dp[i-1][j-1] + 1",          # 5
    "            else:",                                    # 6
    "                dp[i][j] ← max(dp[i-1][j], dp[i][j-1])",  # 7
    "    // walk back from dp[m][n]",                       # 8
    "    while i > 0 and j > 0:",                           # 9
    "        if a[i-1] == b[j-1]: take it; i, j ← i-1, j-1",  # 10
    "        elif dp[i-1][j] > dp[i][j-1]: i ← i-1",         # 11
    "        else: j ← j-1",                                # 12
    "    return lcs",                                       # 13
]


def initial_input() -> Dict[str, Any]:
    return {"str1": "ABCDGH", "str2": "AEDFHR"}


def lcs(data: Dict[str, Any]) -> Generator[Step, None, None]:
    sb   = StepBuilder()
    str1 = data.get("str1")[:MAX_LENGTH] if isinstance(data.get("str1"), str) else ""
    str2 = data.get("str2")[:MAX_LENGTH] if isinstance(data.get("str2"), str) else ""
    m, n = len(str1), len(str2)
    dp   = [[0] * (n + 1) for _ in range(m + 1)]

    yield sb.snapshot(
        "init", code_line=1,
        description=f'Initialize DP table for "{str1}" and "{str2}"',
        dp=dp, str1=str1, str2=str2, m=m, n=n,
    )

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            a, b = str1[i - 1], str2[j - 1]
            yield sb.snapshot(
                "compare", code_line=4,
                description=f"Compare str1[{i - 1}]='{a}' with str2[{j - 1}]='{b}'",
                dp=dp, i=i, j=j, char1=a, char2=b, str1=str1, str2=str2,
            )

            if a == b:
                dp[i][j] = dp[i - 1][j - 1] + 1
                yield sb.snapshot(
                    "match", code_line=5,
                    description=f"Match! '{a}' = '{b}' → dp[{i}][{j}] = dp[{i - 1}][{j - 1}] + 1 = {dp[i][j]}",
                    dp=dp, i=i, j=j, char1=a, char2=b, str1=str1, str2=str2,
                )
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])
                yield sb.snapshot(
                    "no-match", code_line=7,
                    description=(
                        f"No match. max(dp[{i - 1}][{j}]={dp[i - 1][j]}, "
                        f"dp[{i}][{j - 1}]={dp[i][j - 1]}) → dp[{i}][{j}] = {dp[i][j]}"
                    ),
                    dp=dp, i=i, j=j, char1=a, char2=b, str1=str1, str2=str2,
                    from_top=dp[i - 1][j], from_left=dp[i][j - 1],
                )

    # ==============================================================
    # WALK BACK
    # ==============================================================
    chars: List[str] = []
    path: List[Dict[str, Any]] = []
    i, j = m, n
    while i > 0 and j > 0:
        matched = str1[i - 1] == str2[j - 1]
        path.append({"i": i, "j": j, "matched": matched})
        if matched:
            chars.append(str1[i - 1])
            line, note = 10, f"'{str1[i - 1]}' is part of the LCS, move diagonally"
        elif dp[i - 1][j] > dp[i][j - 1]:
            line, note = 11, "move up"
        else:
            line, note = 12, "move left"
        yield sb.snapshot(
            "trace-back", code_line=line,
            description=f"At dp[{i}][{j}]: {note}",
            dp=dp, i=i, j=j, matched=matched, path=path,
            partial_lcs="".join(reversed(chars)), str1=str1, str2=str2,
        )
        if matched:
            i, j = i - 1, j - 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    result = "".join(reversed(chars))
    yield sb.snapshot(
        "complete", code_line=13,
        description=f'LCS: "{result}" with length {dp[m][n]}',
        dp=dp, str1=str1, str2=str2, lcs=result, length=dp[m][n], path=list(reversed(path)),
    )


def validate(data: Dict[str, Any]) -> Validation:
    return first_failure(
        lambda: require_keys(data, "str1", "str2"),
        lambda: require_string_length(data["str1"], "String 1", 1, MAX_LENGTH),
        lambda: require_string_length(data["str2"], "String 2", 1, MAX_LENGTH),
    )
