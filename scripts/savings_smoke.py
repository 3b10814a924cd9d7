from __future__ import annotations

from goaltime.tools.savings_tools import tool_compare_strategies, tool_goal_dashboard, tool_project_plan

def main():
    goal = {
        "currency": "USD",
        "target_amount": "250000",
        "years": "20",
        "current_savings": "5000",
        "monthly_contribution": "500",
        "expected_return": "7",
        "inflation_rate": "3",
        "user_age": 30,
    }
    proj = tool_project_plan(goal)
    print("Future value:", round(proj["future_value"], 2), proj["currency"])
    print("Real value today:", round(proj["real_value"], 2))
    print("Required monthly for target:", round(proj["required_monthly_deposit"], 2))
    print("Months to goal:", proj["months_to_goal"], f"({proj['time_to_goal_reason']})")

    dash = tool_goal_dashboard(goal)
    print("Health:", round(dash["health"]["overall"], 1), dash["health"]["status"])
    print("Status:", dash["achievability"]["status"], "-", dash["achievability"]["message"])
    for i in dash["insights"]:
        print("Insight:", i["priority"], i["title"])

    for s in tool_compare_strategies(goal):
        print("Strategy:", s["strategy"]["name"], round(s["future_value"], 2))

if __name__ == "__main__":
    main()
