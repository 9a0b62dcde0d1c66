from pyreactive import ComponentNode, configure, print_last_trace, render_tree


class Text(ComponentNode):
    def render(self, forced=False):
        label = self.props.get("label", self.key)
        print(f"  [render] {label}: {self.state.get('value', '')}")


class Counter(ComponentNode):
    def should_update(self, next_props, next_state):
        return next_state.get("count") != self.state.get("count")

    def before_update(self, next_props, next_state):
        self.get_child("value").set_state({"value": next_state["count"]})

    def render(self, forced=False):
        print(f"[render] {self.props['title']} (forced={forced})")
        for child in self.children:
            child.force_update()


if __name__ == "__main__":
    configure()
    counter = Counter(
        "counter",
        {"title": "Clicks"},
        [Text("value", {"label": "count"}), Text("hint", {"label": "hint"})],
    )
    counter.set_state({"count": 1})
    counter.set_state({"count": 1}, lambda prev, props: print(f"unchanged: {prev}"))
    counter.set_state({"count": 2})
    counter.remove_child_by_key("hint")
    render_tree(counter)
    print_last_trace()
